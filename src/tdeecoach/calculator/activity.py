"""Activity factor composition.

The activity factor starts from the job activity level and adds four
independent adjustment terms (training, NEAT, health, age) plus an optional
adjustment from an analysis record. The sum is clamped to [1.1, 2.2].

Every table below has an explicit default for keys it doesn't know about.
"""

from __future__ import annotations

import math
from typing import Optional

from tdeecoach.calculator.rounding import round_half_up
from tdeecoach.profiles.models import (
    AIAnalysis,
    HealthProfile,
    LifestyleProfile,
    TrainingProfile,
    UserProfile,
)

MIN_ACTIVITY_FACTOR = 1.1
MAX_ACTIVITY_FACTOR = 2.2

# Activity level multipliers (Harris-Benedict activity factors)
BASE_ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_BASE_MULTIPLIER = 1.55

TRAINING_FREQUENCY_STEP = 0.05  # per session per week

INTENSITY_ADJUSTMENTS = {
    "low": 0.02,
    "moderate": 0.05,
    "high": 0.08,
    "very_high": 0.12,
}
DEFAULT_INTENSITY_ADJUSTMENT = 0.05

TRAINING_TYPE_ADJUSTMENTS = {
    "powerlifting": 0.03,
    "bodybuilding": 0.02,
    "crossfit": 0.08,
    "running": 0.06,
    "cycling": 0.05,
    "swimming": 0.04,
    "yoga": 0.01,
    "pilates": 0.01,
    "martial_arts": 0.06,
    "team_sports": 0.05,
    "hiking": 0.04,
    "dancing": 0.03,
    "climbing": 0.05,
}
DEFAULT_TRAINING_TYPE_ADJUSTMENT = 0.03

EXPERIENCED_EFFICIENCY_YEARS = 5
EXPERIENCED_EFFICIENCY_ADJUSTMENT = -0.02

# NEAT (Non-Exercise Activity Thermogenesis) tables; a missing key adds 0
JOB_TYPE_ADJUSTMENTS = {
    "desk_job": -0.05,
    "standing_job": 0.02,
    "physical_job": 0.08,
    "mixed": 0.03,
    "unemployed": -0.02,
    "student": 0.01,
}

COMMUTE_ADJUSTMENTS = {
    "car": -0.02,
    "public_transport": 0.01,
    "walking": 0.03,
    "cycling": 0.05,
    "remote": -0.01,
}

HOUSEHOLD_ADJUSTMENTS = {
    "minimal": -0.02,
    "light": 0.01,
    "moderate": 0.03,
    "active": 0.05,
}

FIDGETING_ADJUSTMENTS = {
    "very_still": -0.03,
    "some_fidgeting": 0.01,
    "moderate_fidgeting": 0.03,
    "lots_of_fidgeting": 0.05,
}

STANDING_ADJUSTMENTS = {
    "mostly_sitting": -0.03,
    "mixed": 0.01,
    "mostly_standing": 0.03,
    "always_moving": 0.05,
}

SLEEP_QUALITY_ADJUSTMENTS = {
    "poor": -0.05,
    "fair": -0.02,
    "good": 0.0,
    "excellent": 0.02,
}

STRESS_ADJUSTMENTS = {
    "very_low": 0.02,
    "low": 0.01,
    "moderate": 0.0,
    "high": -0.02,
    "very_high": -0.05,
}

SHORT_SLEEP_HOURS = 6
SHORT_SLEEP_ADJUSTMENT = -0.03
LONG_SLEEP_HOURS = 8
LONG_SLEEP_ADJUSTMENT = 0.01
THYROID_ADJUSTMENT = -0.05
DIABETES_ADJUSTMENT = -0.03


def base_multiplier(job_activity_level: str) -> float:
    """Return the base multiplier for a job activity level."""
    return BASE_ACTIVITY_MULTIPLIERS.get(job_activity_level, DEFAULT_BASE_MULTIPLIER)


def training_adjustment(training: TrainingProfile) -> float:
    """Adjustment for training frequency, intensity, primary type and experience."""
    frequency = training.training_frequency_per_week * TRAINING_FREQUENCY_STEP
    intensity = INTENSITY_ADJUSTMENTS.get(
        training.training_intensity, DEFAULT_INTENSITY_ADJUSTMENT
    )

    primary = training.primary_type
    type_bonus = 0.0
    if primary is not None:
        type_bonus = TRAINING_TYPE_ADJUSTMENTS.get(
            primary, DEFAULT_TRAINING_TYPE_ADJUSTMENT
        )

    efficiency = 0.0
    if training.training_experience_years > EXPERIENCED_EFFICIENCY_YEARS:
        efficiency = EXPERIENCED_EFFICIENCY_ADJUSTMENT

    return frequency + intensity + type_bonus + efficiency


def neat_adjustment(lifestyle: LifestyleProfile) -> float:
    """Sum of the five non-exercise activity lookups."""
    return (
        JOB_TYPE_ADJUSTMENTS.get(lifestyle.job_type, 0.0)
        + COMMUTE_ADJUSTMENTS.get(lifestyle.commute_type, 0.0)
        + HOUSEHOLD_ADJUSTMENTS.get(lifestyle.household_activity_level, 0.0)
        + FIDGETING_ADJUSTMENTS.get(lifestyle.fidgeting_level, 0.0)
        + STANDING_ADJUSTMENTS.get(lifestyle.standing_vs_sitting, 0.0)
    )


def health_adjustment(health: HealthProfile) -> float:
    """Adjustment for sleep, stress and metabolic conditions."""
    sleep_quality = SLEEP_QUALITY_ADJUSTMENTS.get(health.sleep_quality, 0.0)

    sleep_duration = 0.0
    if health.sleep_hours_per_night < SHORT_SLEEP_HOURS:
        sleep_duration = SHORT_SLEEP_ADJUSTMENT
    elif health.sleep_hours_per_night > LONG_SLEEP_HOURS:
        sleep_duration = LONG_SLEEP_ADJUSTMENT

    stress = STRESS_ADJUSTMENTS.get(health.stress_level, 0.0)
    thyroid = THYROID_ADJUSTMENT if health.thyroid_issues else 0.0
    diabetes = DIABETES_ADJUSTMENT if health.diabetes else 0.0

    return sleep_quality + sleep_duration + stress + thyroid + diabetes


def age_adjustment(age: int) -> float:
    """Age-related metabolic adjustment. Over-65 takes precedence over over-50."""
    if age > 65:
        return -0.05
    if age > 50:
        return -0.03
    if age < 25:
        return 0.02
    return 0.0


def calculate_activity_factor(
    profile: UserProfile,
    analysis: Optional[AIAnalysis] = None,
) -> float:
    """Compose the activity multiplier for a profile.

    Args:
        profile: User profile
        analysis: Optional analysis record; its adjustment is added last

    Returns:
        Activity factor in [MIN_ACTIVITY_FACTOR, MAX_ACTIVITY_FACTOR]
    """
    base = base_multiplier(profile.lifestyle.job_activity_level)
    ai_term = analysis.activity_factor_adjustment if analysis is not None else 0.0

    factor = (
        base
        + training_adjustment(profile.training)
        + neat_adjustment(profile.lifestyle)
        + health_adjustment(profile.health)
        + age_adjustment(profile.age)
        + ai_term
    )
    return max(MIN_ACTIVITY_FACTOR, min(MAX_ACTIVITY_FACTOR, factor))


def calculate_tdee(bmr: int, activity_factor: float) -> int:
    """Calculate Total Daily Energy Expenditure.

    TDEE = BMR × activity factor, rounded and held inside the integer range
    that the factor clamp allows.
    """
    lowest = math.ceil(bmr * MIN_ACTIVITY_FACTOR)
    highest = math.floor(bmr * MAX_ACTIVITY_FACTOR)
    return max(lowest, min(highest, round_half_up(bmr * activity_factor)))
