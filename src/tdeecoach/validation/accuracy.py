"""Accuracy validation for calculation responses.

Recomputes expected BMR, TDEE and macro ranges from the profile and scores
the engine's actual output against them on a 0-10 scale. The TDEE check
deliberately uses a coarser activity model (base level plus training
frequency only) than the calculator, so it measures plausibility through
percentage-error bands rather than exact agreement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tdeecoach.calculator.activity import (
    MAX_ACTIVITY_FACTOR,
    MIN_ACTIVITY_FACTOR,
    TRAINING_FREQUENCY_STEP,
    base_multiplier,
)
from tdeecoach.calculator.bmr import cunningham, katch_mcardle, mifflin_st_jeor
from tdeecoach.profiles.models import (
    TARGET_GOALS,
    BMRMethod,
    CalculationResponse,
    MacroTargets,
    UserProfile,
)

# Score returned when the claimed method can't apply to the profile
INVALID_METHOD_SCORE = 0

# (upper bound of percentage error, score); first match wins
BMR_ERROR_BANDS = (
    (1, 10),
    (2, 9),
    (5, 8),
    (10, 7),
    (15, 6),
    (20, 5),
    (30, 4),
    (40, 3),
    (50, 2),
)
BMR_FLOOR_SCORE = 1

TDEE_ERROR_BANDS = (
    (5, 10),
    (10, 9),
    (15, 8),
    (20, 7),
    (25, 6),
    (30, 5),
    (40, 4),
    (50, 3),
)
TDEE_FLOOR_SCORE = 2
TDEE_OUT_OF_RANGE_SCORE = 2

# Plausible daily calories per goal
GOAL_CALORIE_BANDS = {
    "fat_loss": (1200, 2500),
    "muscle_gain": (2000, 4000),
    "maintenance": (1500, 3500),
    "recomposition": (1500, 3000),
}

LOW_CONFIDENCE = 6
MIN_FAT_LOSS_CALORIES = 1200
HIGH_PROTEIN_PER_KG = 2.8
SENIOR_AGE = 65
DETAILED_DESCRIPTION_CHARS = 50


@dataclass
class ValidationResult:
    """Scores and advice from one validation pass."""

    overall_score: float
    bmr_accuracy: float
    tdee_accuracy: float
    macro_accuracy: float
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "bmr_accuracy": self.bmr_accuracy,
            "tdee_accuracy": self.tdee_accuracy,
            "macro_accuracy": self.macro_accuracy,
            "warnings": list(self.warnings),
            "recommendations": list(self.recommendations),
        }


def percentage_error(actual: float, expected: float) -> float:
    """Absolute error as a percentage of the expected value."""
    return abs(actual - expected) / expected * 100


def _band_score(error: float, bands: tuple[tuple[float, int], ...], floor: int) -> int:
    for upper, score in bands:
        if error < upper:
            return score
    return floor


def validate_bmr(profile: UserProfile, calculated_bmr: float, method: BMRMethod | str) -> int:
    """Score a BMR against the formula the response claims to have used.

    Katch-McArdle without a body fat measurement, or an unknown method,
    scores INVALID_METHOD_SCORE.
    """
    method_name = method.value if isinstance(method, BMRMethod) else str(method)

    if method_name == BMRMethod.KATCH_MCARDLE.value:
        if not profile.body_fat_percent or profile.body_fat_percent <= 0:
            return INVALID_METHOD_SCORE
        expected = katch_mcardle(profile.weight_kg, profile.body_fat_percent)
    elif method_name == BMRMethod.CUNNINGHAM.value:
        expected = cunningham(profile.weight_kg, profile.is_male)
    elif method_name == BMRMethod.MIFFLIN_ST_JEOR.value:
        expected = mifflin_st_jeor(
            profile.weight_kg, profile.height_cm, profile.age, profile.is_male
        )
    else:
        return INVALID_METHOD_SCORE

    error = percentage_error(calculated_bmr, expected)
    return _band_score(error, BMR_ERROR_BANDS, BMR_FLOOR_SCORE)


def expected_activity_factor(profile: UserProfile) -> float:
    """Approximate activity factor: base level plus training frequency."""
    base = base_multiplier(profile.lifestyle.job_activity_level)
    return base + profile.training.training_frequency_per_week * TRAINING_FREQUENCY_STEP


def validate_tdee(profile: UserProfile, calculated_tdee: float, bmr: float) -> int:
    """Score a TDEE against the approximate expectation."""
    if calculated_tdee < bmr * MIN_ACTIVITY_FACTOR or calculated_tdee > bmr * MAX_ACTIVITY_FACTOR:
        return TDEE_OUT_OF_RANGE_SCORE

    expected = bmr * expected_activity_factor(profile)
    error = percentage_error(calculated_tdee, expected)
    return _band_score(error, TDEE_ERROR_BANDS, TDEE_FLOOR_SCORE)


def _range_score(value: float, ideal: tuple[float, float], acceptable: tuple[float, float]) -> int:
    if ideal[0] <= value <= ideal[1]:
        return 3
    if acceptable[0] <= value <= acceptable[1]:
        return 2
    return 1


def validate_macro_target(profile: UserProfile, target: MacroTargets, goal: str) -> int:
    """Score one goal's targets (0-10)."""
    protein = _range_score(target.protein_g / profile.weight_kg, (1.6, 3.0), (1.2, 3.5))
    fat = _range_score(target.fat_percent, (20, 35), (15, 40))
    carbs = _range_score(target.carb_percent, (45, 65), (35, 75))

    calorie_bonus = 0
    band = GOAL_CALORIE_BANDS.get(goal)
    if band is not None and band[0] <= target.calories <= band[1]:
        calorie_bonus = 1

    return protein + fat + carbs + calorie_bonus


def validate_macros(profile: UserProfile, targets: dict[str, MacroTargets]) -> float:
    """Average macro score over the goals present (0 when none are)."""
    scores = [
        validate_macro_target(profile, targets[goal], goal)
        for goal in TARGET_GOALS
        if goal in targets
    ]
    if not scores:
        return 0
    return sum(scores) / len(scores)


def generate_warnings(profile: UserProfile, response: CalculationResponse) -> list[str]:
    """Potential issues with the profile or its targets."""
    warnings = []
    targets = response.targets

    if response.confidence_score < LOW_CONFIDENCE:
        warnings.append("Low confidence score - consider providing more detailed information")

    fat_loss = targets.get("fat_loss")
    if fat_loss is not None and fat_loss.calories < MIN_FAT_LOSS_CALORIES:
        warnings.append("Fat loss calories are very low - may not be sustainable")

    maintenance = targets.get("maintenance")
    if maintenance is not None and maintenance.protein_g / profile.weight_kg > HIGH_PROTEIN_PER_KG:
        warnings.append("Protein target is very high - ensure adequate hydration and fiber")

    if profile.age > SENIOR_AGE:
        warnings.append("Consider consulting healthcare provider due to age")

    if profile.health.medical_conditions:
        warnings.append("Medical conditions present - consult healthcare provider")

    if any(t.carb_g < 0 for t in targets.values()):
        warnings.append("Protein and fat exceed the calorie target - carbohydrate target is negative")

    return warnings


def generate_recommendations(profile: UserProfile, response: CalculationResponse) -> list[str]:
    """Ways to make the next calculation more accurate."""
    recommendations = []

    if not profile.body_fat_percent:
        recommendations.append(
            "Consider getting body fat percentage measured for more accurate calculations"
        )
    if len(profile.lifestyle.daily_routine_description) < DETAILED_DESCRIPTION_CHARS:
        recommendations.append(
            "Provide more detailed daily routine description for better accuracy"
        )
    if len(profile.training.training_description) < DETAILED_DESCRIPTION_CHARS:
        recommendations.append(
            "Provide more detailed training description for better accuracy"
        )
    if response.ai_enhancements is None:
        recommendations.append("Enable AI mode for more personalized recommendations")

    return recommendations


def validate_tdee_accuracy(
    profile: UserProfile,
    response: CalculationResponse,
) -> ValidationResult:
    """Audit a calculation response against independently recomputed values.

    Args:
        profile: Profile the response was calculated for
        response: Engine output to audit

    Returns:
        ValidationResult with per-area scores, their mean, warnings and
        recommendations
    """
    bmr_accuracy = validate_bmr(profile, response.bmr, response.method_used)
    tdee_accuracy = validate_tdee(profile, response.tdee, response.bmr)
    macro_accuracy = validate_macros(profile, response.targets)

    return ValidationResult(
        overall_score=(bmr_accuracy + tdee_accuracy + macro_accuracy) / 3,
        bmr_accuracy=bmr_accuracy,
        tdee_accuracy=tdee_accuracy,
        macro_accuracy=macro_accuracy,
        warnings=generate_warnings(profile, response),
        recommendations=generate_recommendations(profile, response),
    )
