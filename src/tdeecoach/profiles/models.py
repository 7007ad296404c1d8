"""Data models for user profiles, analysis records and calculation results.

Profiles are immutable and supplied per request. Enum-like profile fields
(job type, sleep quality, training intensity, ...) are kept as plain strings
so that unknown values reach the calculator's lookup tables and fall back to
their documented defaults instead of failing at parse time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from tdeecoach.errors import InvalidProfileError

RESPONSE_VERSION = "2.0.0"


class Gender(Enum):
    """Gender as supplied by the user."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Goal(Enum):
    """Body composition goal."""

    FAT_LOSS = "fat_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"
    RECOMPOSITION = "recomposition"
    PERFORMANCE = "performance"


class BMRMethod(Enum):
    """Formula used to estimate BMR."""

    KATCH_MCARDLE = "katch_mcardle"
    CUNNINGHAM = "cunningham"
    MIFFLIN_ST_JEOR = "mifflin_st_jeor"


class TrainingType(Enum):
    """Training type tags."""

    POWERLIFTING = "powerlifting"
    BODYBUILDING = "bodybuilding"
    CROSSFIT = "crossfit"
    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    YOGA = "yoga"
    PILATES = "pilates"
    MARTIAL_ARTS = "martial_arts"
    TEAM_SPORTS = "team_sports"
    HIKING = "hiking"
    DANCING = "dancing"
    CLIMBING = "climbing"
    OTHER = "other"


class TrainingIntensity(Enum):
    """Self-reported training intensity."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


# Goals that get their own macro targets, in output order
TARGET_GOALS = ("maintenance", "fat_loss", "muscle_gain", "recomposition")

VALID_GENDERS = tuple(g.value for g in Gender)
VALID_GOALS = tuple(g.value for g in Goal)


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"expected a list of strings, got {value!r}")
    return tuple(str(v) for v in value)


_TRUE_STRINGS = ("true", "yes", "y", "1", "on")
_FALSE_STRINGS = ("false", "no", "n", "0", "off", "")


def _flag(data: dict, key: str) -> bool:
    value = data.get(key, False)
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise InvalidProfileError(f"{key} must be true or false, got {value!r}")


def _number(data: dict, key: str, default: float = 0, cast=float):
    value = data.get(key)
    if value is None or value == "":
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise InvalidProfileError(f"{key} must be a number, got {value!r}")


@dataclass(frozen=True)
class LifestyleProfile:
    """Daily routine and non-exercise activity."""

    daily_routine_description: str = ""
    job_type: str = ""  # desk_job, standing_job, physical_job, mixed, unemployed, student
    job_activity_level: str = ""  # sedentary, light, moderate, active, very_active
    commute_type: str = ""  # car, public_transport, walking, cycling, remote
    commute_duration_minutes: Optional[int] = None
    household_activities: tuple[str, ...] = ()
    household_activity_level: str = ""  # minimal, light, moderate, active
    hobbies: tuple[str, ...] = ()
    leisure_activity_level: str = ""
    fidgeting_level: str = ""  # very_still ... lots_of_fidgeting
    standing_vs_sitting: str = ""  # mostly_sitting, mixed, mostly_standing, always_moving

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "LifestyleProfile":
        data = data or {}
        duration = data.get("commute_duration_minutes")
        return cls(
            daily_routine_description=data.get("daily_routine_description") or "",
            job_type=data.get("job_type") or "",
            job_activity_level=data.get("job_activity_level") or "",
            commute_type=data.get("commute_type") or "",
            commute_duration_minutes=(
                _number(data, "commute_duration_minutes", cast=int)
                if duration is not None
                else None
            ),
            household_activities=_str_tuple(data.get("household_activities")),
            household_activity_level=data.get("household_activity_level") or "",
            hobbies=_str_tuple(data.get("hobbies")),
            leisure_activity_level=data.get("leisure_activity_level") or "",
            fidgeting_level=data.get("fidgeting_level") or "",
            standing_vs_sitting=data.get("standing_vs_sitting") or "",
        )


@dataclass(frozen=True)
class TrainingProfile:
    """Structured training information. The first training type is the primary one."""

    training_description: str = ""
    training_types: tuple[str, ...] = ()
    training_frequency_per_week: float = 0
    training_duration_minutes: float = 0
    training_intensity: str = ""  # low, moderate, high, very_high
    training_experience_years: float = 0
    training_environment: str = ""

    @property
    def primary_type(self) -> Optional[str]:
        return self.training_types[0] if self.training_types else None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "TrainingProfile":
        data = data or {}
        return cls(
            training_description=data.get("training_description") or "",
            training_types=_str_tuple(data.get("training_types")),
            training_frequency_per_week=_number(data, "training_frequency_per_week"),
            training_duration_minutes=_number(data, "training_duration_minutes"),
            training_intensity=data.get("training_intensity") or "",
            training_experience_years=_number(data, "training_experience_years"),
            training_environment=data.get("training_environment") or "",
        )


@dataclass(frozen=True)
class HealthProfile:
    """Sleep, stress and medical context."""

    sleep_hours_per_night: float = 7
    sleep_quality: str = ""  # poor, fair, good, excellent
    stress_level: str = ""  # very_low, low, moderate, high, very_high
    medical_conditions: tuple[str, ...] = ()
    medications: tuple[str, ...] = ()
    thyroid_issues: bool = False
    diabetes: bool = False

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "HealthProfile":
        data = data or {}
        return cls(
            sleep_hours_per_night=_number(data, "sleep_hours_per_night", default=7),
            sleep_quality=data.get("sleep_quality") or "",
            stress_level=data.get("stress_level") or "",
            medical_conditions=_str_tuple(data.get("medical_conditions")),
            medications=_str_tuple(data.get("medications")),
            thyroid_issues=_flag(data, "thyroid_issues"),
            diabetes=_flag(data, "diabetes"),
        )


@dataclass(frozen=True)
class BehavioralProfile:
    """Eating habits and adherence context."""

    meal_frequency: str = ""  # 1-2_meals, 3_meals, 4-5_meals, 6+_meals
    meal_timing_preference: str = ""  # early_bird, normal, night_owl, irregular
    cooking_ability: str = ""
    meal_prep_frequency: str = ""  # never, rarely, sometimes, often, always
    adherence_risks: tuple[str, ...] = ()
    motivation_level: str = ""  # very_low ... very_high
    support_system: str = ""  # none, minimal, moderate, strong

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "BehavioralProfile":
        data = data or {}
        return cls(
            meal_frequency=data.get("meal_frequency") or "",
            meal_timing_preference=data.get("meal_timing_preference") or "",
            cooking_ability=data.get("cooking_ability") or "",
            meal_prep_frequency=data.get("meal_prep_frequency") or "",
            adherence_risks=_str_tuple(data.get("adherence_risks")),
            motivation_level=data.get("motivation_level") or "",
            support_system=data.get("support_system") or "",
        )


@dataclass(frozen=True)
class UserProfile:
    """Complete user profile for one calculation request."""

    name: str
    email: str
    age: int
    gender: str  # 'male', 'female' or 'other'
    height_cm: float
    weight_kg: float
    goal: str
    body_fat_percent: Optional[float] = None
    lifestyle: LifestyleProfile = field(default_factory=LifestyleProfile)
    training: TrainingProfile = field(default_factory=TrainingProfile)
    health: HealthProfile = field(default_factory=HealthProfile)
    behavioral: BehavioralProfile = field(default_factory=BehavioralProfile)

    @property
    def is_male(self) -> bool:
        return self.gender == Gender.MALE.value

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """Build a profile from a request body.

        Accepts both ``height_cm``/``weight_kg`` and the shorter
        ``height``/``weight`` keys.

        Raises:
            InvalidProfileError: If a numeric field, list field or section
                cannot be parsed
        """
        if not isinstance(data, dict):
            raise InvalidProfileError("profile must be an object")

        try:
            lifestyle = LifestyleProfile.from_dict(data.get("lifestyle"))
            training = TrainingProfile.from_dict(data.get("training"))
            health = HealthProfile.from_dict(data.get("health"))
            behavioral = BehavioralProfile.from_dict(data.get("behavioral"))
        except (TypeError, AttributeError) as e:
            raise InvalidProfileError(f"malformed profile section: {e}") from e

        height_key = "height_cm" if "height_cm" in data else "height"
        weight_key = "weight_kg" if "weight_kg" in data else "weight"
        body_fat = data.get("body_fat_percent")

        return cls(
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            age=_number(data, "age", cast=int),
            gender=str(data.get("gender") or "").lower(),
            height_cm=_number(data, height_key),
            weight_kg=_number(data, weight_key),
            goal=str(data.get("goal") or "").lower(),
            body_fat_percent=(
                _number(data, "body_fat_percent") if body_fat not in (None, "") else None
            ),
            lifestyle=lifestyle,
            training=training,
            health=health,
            behavioral=behavioral,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON body shape."""
        data: dict[str, Any] = {
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "gender": self.gender,
            "height_cm": self.height_cm,
            "weight_kg": self.weight_kg,
            "goal": self.goal,
        }
        if self.body_fat_percent is not None:
            data["body_fat_percent"] = self.body_fat_percent
        for section in ("lifestyle", "training", "health", "behavioral"):
            record = getattr(self, section)
            data[section] = {
                key: list(value) if isinstance(value, tuple) else value
                for key, value in record.__dict__.items()
            }
        return data


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class AIAnalysis:
    """Externally produced analysis of a profile.

    Values come from an LLM or the deterministic fallback and are treated as
    untrusted: ``from_dict`` bounds every numeric field.
    """

    estimated_neat: float = 300
    activity_factor_adjustment: float = 0.0
    lifestyle_activity_score: float = 5
    training_intensity_score: float = 5
    training_volume_score: float = 5
    recovery_needs: str = "moderate"
    estimated_metabolic_rate: float = 0
    metabolic_efficiency: str = "normal"
    adaptation_risk: str = "moderate"
    adherence_score: float = 5
    risk_factors: tuple[str, ...] = ()
    success_factors: tuple[str, ...] = ()
    recommended_approach: str = ""
    key_focus_areas: tuple[str, ...] = ()
    potential_challenges: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "AIAnalysis":
        def num(key: str, default: float) -> float:
            try:
                return float(data.get(key, default))
            except (TypeError, ValueError):
                return default

        def score(key: str) -> float:
            return _clamp(num(key, 5), 1, 10)

        return cls(
            estimated_neat=_clamp(num("estimated_neat", 300), 0, 1500),
            activity_factor_adjustment=_clamp(
                num("activity_factor_adjustment", 0.0), -0.2, 0.2
            ),
            lifestyle_activity_score=score("lifestyle_activity_score"),
            training_intensity_score=score("training_intensity_score"),
            training_volume_score=score("training_volume_score"),
            recovery_needs=str(data.get("recovery_needs") or "moderate"),
            estimated_metabolic_rate=max(0.0, num("estimated_metabolic_rate", 0)),
            metabolic_efficiency=str(data.get("metabolic_efficiency") or "normal"),
            adaptation_risk=str(data.get("adaptation_risk") or "moderate"),
            adherence_score=score("adherence_score"),
            risk_factors=_str_tuple(data.get("risk_factors")),
            success_factors=_str_tuple(data.get("success_factors")),
            recommended_approach=str(data.get("recommended_approach") or ""),
            key_focus_areas=_str_tuple(data.get("key_focus_areas")),
            potential_challenges=_str_tuple(data.get("potential_challenges")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in self.__dict__.items()
        }


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macro targets for one goal."""

    calories: int
    protein_g: int
    fat_g: int
    carb_g: int
    protein_percent: int
    fat_percent: int
    carb_percent: int

    def to_dict(self) -> dict[str, int]:
        return dict(self.__dict__)

    @classmethod
    def from_dict(cls, data: dict) -> "MacroTargets":
        return cls(**{key: data[key] for key in cls.__dataclass_fields__})


@dataclass(frozen=True)
class TimingRecommendations:
    """Qualitative nutrient timing advice."""

    pre_workout: str
    post_workout: str
    meal_timing: str
    hydration: str
    sleep_optimization: str

    def to_dict(self) -> dict[str, str]:
        return dict(self.__dict__)


@dataclass(frozen=True)
class AIEnhancements:
    """Extra output present only when an analysis record was used."""

    adjusted_tdee: int
    activity_factor_adjustment: float
    recommended_deficit_percent: float
    macro_profile_hint: str
    timing_recommendations: TimingRecommendations

    def to_dict(self) -> dict[str, Any]:
        return {
            "adjusted_tdee": self.adjusted_tdee,
            "activity_factor_adjustment": self.activity_factor_adjustment,
            "recommended_deficit_percent": self.recommended_deficit_percent,
            "macro_profile_hint": self.macro_profile_hint,
            "timing_recommendations": self.timing_recommendations.to_dict(),
        }


@dataclass(frozen=True)
class MiniPlan:
    """One-week starter plan."""

    weekly_sessions: int
    training_template: str
    step_target: str
    protein_minimum_g: int
    habits: tuple[str, ...] = ()
    weekly_focus: str = ""
    success_metrics: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "MiniPlan":
        return cls(
            weekly_sessions=int(data["weekly_sessions"]),
            training_template=str(data["training_template"]),
            step_target=str(data["step_target"]),
            protein_minimum_g=int(data["protein_minimum_g"]),
            habits=_str_tuple(data.get("habits")),
            weekly_focus=str(data.get("weekly_focus") or ""),
            success_metrics=_str_tuple(data.get("success_metrics")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in self.__dict__.items()
        }


@dataclass(frozen=True)
class Coaching:
    """Coaching block of a calculation response."""

    coach_note: str = ""
    ai_coach_note: Optional[str] = None
    mini_plan: Optional[MiniPlan] = None
    risk_flags: tuple[str, ...] = ()
    success_strategies: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "coach_note": self.coach_note,
            "risk_flags": list(self.risk_flags),
            "success_strategies": list(self.success_strategies),
        }
        if self.ai_coach_note is not None:
            data["ai_coach_note"] = self.ai_coach_note
        if self.mini_plan is not None:
            data["mini_plan"] = self.mini_plan.to_dict()
        return data


@dataclass(frozen=True)
class CalculationResponse:
    """Everything the engine returns for one profile."""

    bmr: int
    tdee: int
    method_used: BMRMethod
    targets: dict[str, MacroTargets]
    coaching: Coaching
    confidence_score: float
    ai_enhancements: Optional[AIEnhancements] = None
    calculation_timestamp: str = field(
        default_factory=lambda: datetime.now().isoformat()
    )
    version: str = RESPONSE_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON response shape."""
        data: dict[str, Any] = {
            "bmr": self.bmr,
            "tdee": self.tdee,
            "method_used": self.method_used.value,
            "targets": {goal: t.to_dict() for goal, t in self.targets.items()},
        }
        if self.ai_enhancements is not None:
            data["ai_enhancements"] = self.ai_enhancements.to_dict()
        data.update(
            {
                "coaching": self.coaching.to_dict(),
                "confidence_score": self.confidence_score,
                "calculation_timestamp": self.calculation_timestamp,
                "version": self.version,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CalculationResponse":
        """Rebuild a response from its JSON shape (for auditing saved output).

        An unrecognized ``method_used`` raises ValueError.
        """
        enhancements = data.get("ai_enhancements")
        coaching = data.get("coaching") or {}
        mini_plan = coaching.get("mini_plan")
        return cls(
            bmr=data["bmr"],
            tdee=data["tdee"],
            method_used=BMRMethod(data["method_used"]),
            targets={
                goal: MacroTargets.from_dict(target)
                for goal, target in (data.get("targets") or {}).items()
            },
            coaching=Coaching(
                coach_note=coaching.get("coach_note", ""),
                ai_coach_note=coaching.get("ai_coach_note"),
                mini_plan=MiniPlan.from_dict(mini_plan) if mini_plan else None,
                risk_flags=_str_tuple(coaching.get("risk_flags")),
                success_strategies=_str_tuple(coaching.get("success_strategies")),
            ),
            confidence_score=data.get("confidence_score", 0),
            ai_enhancements=(
                AIEnhancements(
                    adjusted_tdee=enhancements["adjusted_tdee"],
                    activity_factor_adjustment=enhancements.get(
                        "activity_factor_adjustment", 0.0
                    ),
                    recommended_deficit_percent=enhancements.get(
                        "recommended_deficit_percent", 0.2
                    ),
                    macro_profile_hint=enhancements.get("macro_profile_hint", ""),
                    timing_recommendations=TimingRecommendations(
                        **enhancements["timing_recommendations"]
                    ),
                )
                if enhancements
                else None
            ),
            calculation_timestamp=data.get(
                "calculation_timestamp", datetime.now().isoformat()
            ),
            version=data.get("version", RESPONSE_VERSION),
        )
