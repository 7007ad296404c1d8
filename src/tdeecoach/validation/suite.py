"""Validation battery over a fixed set of reference profiles.

Each case runs the real (non-AI) engine and audits the response with
``validate_tdee_accuracy``. The battery is the regression check behind the
``tdeecoach suite`` command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from tdeecoach.calculator.engine import calculate
from tdeecoach.profiles.models import UserProfile
from tdeecoach.validation.accuracy import ValidationResult, validate_tdee_accuracy

DEFAULT_PASS_THRESHOLD = 7.0

CANNED_PROFILES: dict[str, dict[str, Any]] = {
    "standard_male_lifter": {
        "name": "Test Male",
        "email": "test@example.com",
        "age": 30,
        "gender": "male",
        "height_cm": 180,
        "weight_kg": 80,
        "goal": "maintenance",
        "lifestyle": {
            "daily_routine_description": "Office worker, sits at desk most of the day",
            "job_type": "desk_job",
            "job_activity_level": "sedentary",
            "commute_type": "car",
            "household_activities": ["cooking", "cleaning"],
            "household_activity_level": "light",
            "hobbies": ["reading", "gaming"],
            "leisure_activity_level": "sedentary",
            "fidgeting_level": "some_fidgeting",
            "standing_vs_sitting": "mostly_sitting",
        },
        "training": {
            "training_description": "Lifts weights 3x per week",
            "training_types": ["powerlifting"],
            "training_frequency_per_week": 3,
            "training_duration_minutes": 60,
            "training_intensity": "moderate",
            "training_experience_years": 2,
            "training_environment": "gym",
        },
        "health": {
            "sleep_hours_per_night": 7,
            "sleep_quality": "good",
            "stress_level": "moderate",
        },
        "behavioral": {
            "meal_frequency": "3_meals",
            "meal_timing_preference": "normal",
            "cooking_ability": "intermediate",
            "meal_prep_frequency": "sometimes",
            "motivation_level": "high",
            "support_system": "moderate",
        },
    },
    "female_measured_body_fat": {
        "name": "Test Female",
        "email": "female@example.com",
        "age": 28,
        "gender": "female",
        "height_cm": 165,
        "weight_kg": 62,
        "goal": "fat_loss",
        "body_fat_percent": 26,
        "lifestyle": {
            "daily_routine_description": "Nurse on rotating shifts, on her feet most of the day",
            "job_type": "standing_job",
            "job_activity_level": "light",
            "commute_type": "public_transport",
            "household_activity_level": "moderate",
            "fidgeting_level": "moderate_fidgeting",
            "standing_vs_sitting": "mostly_standing",
        },
        "training": {
            "training_description": "Pilates twice a week and a long walk on weekends",
            "training_types": ["pilates"],
            "training_frequency_per_week": 2,
            "training_duration_minutes": 50,
            "training_intensity": "low",
            "training_experience_years": 1,
        },
        "health": {
            "sleep_hours_per_night": 6.5,
            "sleep_quality": "fair",
            "stress_level": "high",
        },
        "behavioral": {
            "meal_frequency": "4-5_meals",
            "meal_timing_preference": "irregular",
            "meal_prep_frequency": "rarely",
            "adherence_risks": ["stress_eating"],
            "motivation_level": "moderate",
            "support_system": "minimal",
        },
    },
    "experienced_bodybuilder": {
        "name": "Test Bodybuilder",
        "email": "bodybuilder@example.com",
        "age": 35,
        "gender": "male",
        "height_cm": 178,
        "weight_kg": 92,
        "goal": "muscle_gain",
        "body_fat_percent": 12,
        "lifestyle": {
            "daily_routine_description": "Personal trainer, coaching clients on the gym floor",
            "job_type": "mixed",
            "job_activity_level": "moderate",
            "commute_type": "car",
            "household_activity_level": "light",
            "fidgeting_level": "some_fidgeting",
            "standing_vs_sitting": "mixed",
        },
        "training": {
            "training_description": "Push/pull/legs split, six sessions a week, heavy compounds first",
            "training_types": ["bodybuilding"],
            "training_frequency_per_week": 6,
            "training_duration_minutes": 75,
            "training_intensity": "high",
            "training_experience_years": 12,
            "training_environment": "gym",
        },
        "health": {
            "sleep_hours_per_night": 8,
            "sleep_quality": "good",
            "stress_level": "low",
        },
        "behavioral": {
            "meal_frequency": "6+_meals",
            "meal_timing_preference": "early_bird",
            "cooking_ability": "advanced",
            "meal_prep_frequency": "always",
            "motivation_level": "very_high",
            "support_system": "strong",
        },
    },
    "sedentary_older_adult": {
        "name": "Test Senior",
        "email": "senior@example.com",
        "age": 68,
        "gender": "female",
        "height_cm": 160,
        "weight_kg": 70,
        "goal": "maintenance",
        "lifestyle": {
            "daily_routine_description": "Retired, gardening and short walks",
            "job_type": "unemployed",
            "job_activity_level": "sedentary",
            "commute_type": "remote",
            "household_activity_level": "moderate",
            "fidgeting_level": "very_still",
            "standing_vs_sitting": "mostly_sitting",
        },
        "training": {
            "training_description": "Gentle yoga class",
            "training_types": ["yoga"],
            "training_frequency_per_week": 1,
            "training_duration_minutes": 45,
            "training_intensity": "low",
            "training_experience_years": 3,
        },
        "health": {
            "sleep_hours_per_night": 7,
            "sleep_quality": "fair",
            "stress_level": "low",
            "medical_conditions": ["hypertension"],
        },
        "behavioral": {
            "meal_frequency": "3_meals",
            "meal_timing_preference": "early_bird",
            "meal_prep_frequency": "often",
            "motivation_level": "moderate",
            "support_system": "strong",
        },
    },
    "endurance_runner": {
        "name": "Test Runner",
        "email": "runner@example.com",
        "age": 40,
        "gender": "male",
        "height_cm": 175,
        "weight_kg": 68,
        "goal": "maintenance",
        "lifestyle": {
            "daily_routine_description": "Software engineer working from home with a standing desk",
            "job_type": "desk_job",
            "job_activity_level": "light",
            "commute_type": "remote",
            "household_activity_level": "light",
            "fidgeting_level": "some_fidgeting",
            "standing_vs_sitting": "mixed",
        },
        "training": {
            "training_description": "Marathon block: five runs a week including intervals and a long run",
            "training_types": ["running"],
            "training_frequency_per_week": 5,
            "training_duration_minutes": 60,
            "training_intensity": "high",
            "training_experience_years": 8,
        },
        "health": {
            "sleep_hours_per_night": 7.5,
            "sleep_quality": "good",
            "stress_level": "moderate",
        },
        "behavioral": {
            "meal_frequency": "4-5_meals",
            "meal_timing_preference": "early_bird",
            "meal_prep_frequency": "sometimes",
            "motivation_level": "high",
            "support_system": "moderate",
        },
    },
    "young_active_student": {
        "name": "Test Student",
        "email": "student@example.com",
        "age": 20,
        "gender": "female",
        "height_cm": 170,
        "weight_kg": 60,
        "goal": "recomposition",
        "lifestyle": {
            "daily_routine_description": "University student, cycles between lectures",
            "job_type": "student",
            "job_activity_level": "active",
            "commute_type": "cycling",
            "household_activity_level": "light",
            "fidgeting_level": "lots_of_fidgeting",
            "standing_vs_sitting": "always_moving",
        },
        "training": {
            "training_description": "Football practice and a weekly match",
            "training_types": ["team_sports"],
            "training_frequency_per_week": 4,
            "training_duration_minutes": 90,
            "training_intensity": "high",
            "training_experience_years": 4,
        },
        "health": {
            "sleep_hours_per_night": 8,
            "sleep_quality": "good",
            "stress_level": "moderate",
        },
        "behavioral": {
            "meal_frequency": "3_meals",
            "meal_timing_preference": "night_owl",
            "meal_prep_frequency": "rarely",
            "adherence_risks": ["weekend_binges"],
            "motivation_level": "high",
            "support_system": "moderate",
        },
    },
}


@dataclass
class ValidationCase:
    """One audited battery case."""

    name: str
    result: ValidationResult
    passed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "passed": self.passed, **self.result.to_dict()}


@dataclass
class ValidationSuite:
    """Summary of a battery run."""

    total_tests: int = 0
    passed_tests: int = 0
    average_score: float = 0.0
    results: list[ValidationCase] = field(default_factory=list)

    @property
    def failed_tests(self) -> int:
        return self.total_tests - self.passed_tests

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_tests": self.total_tests,
            "passed_tests": self.passed_tests,
            "average_score": self.average_score,
            "results": [case.to_dict() for case in self.results],
        }


def canned_profiles() -> dict[str, UserProfile]:
    """Reference profiles keyed by case name."""
    return {name: UserProfile.from_dict(data) for name, data in CANNED_PROFILES.items()}


def run_validation_suite(
    cases: Optional[Iterable[tuple[str, UserProfile]]] = None,
    pass_threshold: float = DEFAULT_PASS_THRESHOLD,
) -> ValidationSuite:
    """Calculate and audit every case.

    Args:
        cases: (name, profile) pairs; defaults to the canned reference profiles
        pass_threshold: Minimum overall score for a case to pass

    Returns:
        ValidationSuite summary
    """
    if cases is None:
        cases = canned_profiles().items()

    results = []
    for name, profile in cases:
        response = calculate(profile, include_coaching=False)
        result = validate_tdee_accuracy(profile, response)
        results.append(
            ValidationCase(
                name=name,
                result=result,
                passed=result.overall_score >= pass_threshold,
            )
        )

    if not results:
        return ValidationSuite()

    return ValidationSuite(
        total_tests=len(results),
        passed_tests=sum(1 for case in results if case.passed),
        average_score=sum(case.result.overall_score for case in results) / len(results),
        results=results,
    )
