"""Profile analysis: AI-assisted when a client is available, heuristic otherwise.

The deterministic fallback scores each area on a 1-10 scale. The averaging
steps ``(base + x) / 2`` happen before the additive terms, so the order of
operations below is part of the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from tdeecoach.calculator.bmr import mifflin_st_jeor
from tdeecoach.calculator.rounding import round_half_up
from tdeecoach.errors import ProviderError
from tdeecoach.llm import prompts
from tdeecoach.llm.client import ChatClient
from tdeecoach.profiles.models import (
    AIAnalysis,
    BehavioralProfile,
    LifestyleProfile,
    TrainingProfile,
    TrainingType,
    UserProfile,
)

logger = logging.getLogger(__name__)

# Lifestyle activity score tables
JOB_SCORES = {
    "desk_job": 3,
    "standing_job": 5,
    "physical_job": 8,
    "mixed": 6,
    "unemployed": 4,
    "student": 5,
}
COMMUTE_SCORES = {
    "car": 0,
    "public_transport": 1,
    "walking": 3,
    "cycling": 4,
    "remote": 0,
}
HOUSEHOLD_SCORES = {
    "minimal": 0,
    "light": 1,
    "moderate": 2,
    "active": 3,
}
FIDGETING_SCORES = {
    "very_still": -1,
    "some_fidgeting": 0,
    "moderate_fidgeting": 1,
    "lots_of_fidgeting": 2,
}

# Training score table
INTENSITY_SCORES = {
    "low": 2,
    "moderate": 5,
    "high": 8,
    "very_high": 10,
}

# Adherence score tables
MOTIVATION_SCORES = {
    "very_low": 2,
    "low": 4,
    "moderate": 6,
    "high": 8,
    "very_high": 10,
}
SUPPORT_SCORES = {
    "none": 0,
    "minimal": 1,
    "moderate": 2,
    "strong": 3,
}

DEFAULT_SUCCESS_FACTORS = ("Consistent tracking", "Regular training", "Adequate sleep")
DEFAULT_FOCUS_AREAS = ("Protein intake", "Training consistency", "Sleep quality")
DEFAULT_APPROACH = "Gradual implementation with focus on consistency"


def _bounded_score(score: float) -> int:
    return max(1, min(10, round_half_up(score)))


def assess_lifestyle_score(lifestyle: LifestyleProfile) -> int:
    """Lifestyle activity score (1-10)."""
    averaged = (5 + JOB_SCORES.get(lifestyle.job_type, 5)) / 2
    commute = COMMUTE_SCORES.get(lifestyle.commute_type, 0)
    household = HOUSEHOLD_SCORES.get(lifestyle.household_activity_level, 0)
    fidgeting = FIDGETING_SCORES.get(lifestyle.fidgeting_level, 0)
    return _bounded_score(averaged + commute + household + fidgeting)


def assess_training_score(training: TrainingProfile) -> int:
    """Training intensity/volume score (1-10)."""
    with_frequency = 5 + training.training_frequency_per_week * 0.5
    averaged = (with_frequency + INTENSITY_SCORES.get(training.training_intensity, 5)) / 2
    experience = 1 if training.training_experience_years > 5 else 0
    return _bounded_score(averaged + experience)


def assess_adherence_score(behavioral: BehavioralProfile) -> int:
    """Adherence likelihood score (1-10)."""
    averaged = (7 + MOTIVATION_SCORES.get(behavioral.motivation_level, 6)) / 2
    risk_penalty = len(behavioral.adherence_risks) * 0.5
    support = SUPPORT_SCORES.get(behavioral.support_system, 0)
    return _bounded_score(averaged - risk_penalty + support)


def fallback_analysis(profile: UserProfile) -> AIAnalysis:
    """Build a deterministic analysis record with a zero activity adjustment."""
    training_score = assess_training_score(profile.training)
    risks = profile.behavioral.adherence_risks

    return AIAnalysis(
        estimated_neat=300,
        activity_factor_adjustment=0.0,
        lifestyle_activity_score=assess_lifestyle_score(profile.lifestyle),
        training_intensity_score=training_score,
        training_volume_score=training_score,
        recovery_needs="moderate",
        estimated_metabolic_rate=mifflin_st_jeor(
            profile.weight_kg, profile.height_cm, profile.age, profile.is_male
        ),
        metabolic_efficiency="normal",
        adaptation_risk="moderate",
        adherence_score=assess_adherence_score(profile.behavioral),
        risk_factors=risks,
        success_factors=DEFAULT_SUCCESS_FACTORS,
        recommended_approach=DEFAULT_APPROACH,
        key_focus_areas=DEFAULT_FOCUS_AREAS,
        potential_challenges=risks,
    )


@dataclass(frozen=True)
class RoutineAnalysis:
    """Analysis of a free-text daily routine."""

    activity_score: float = 5
    neat_estimate: float = 300
    job_activity_level: str = "moderate"
    lifestyle_insights: tuple[str, ...] = ("Unable to analyze routine description",)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoutineAnalysis":
        return cls(
            activity_score=max(1.0, min(10.0, float(data.get("activity_score", 5)))),
            neat_estimate=max(100.0, min(800.0, float(data.get("neat_estimate", 300)))),
            job_activity_level=str(data.get("job_activity_level") or "moderate"),
            lifestyle_insights=tuple(str(i) for i in data.get("lifestyle_insights") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "activity_score": self.activity_score,
            "neat_estimate": self.neat_estimate,
            "job_activity_level": self.job_activity_level,
            "lifestyle_insights": list(self.lifestyle_insights),
        }


@dataclass(frozen=True)
class TrainingAnalysis:
    """Analysis of a free-text training description."""

    training_types: tuple[str, ...] = ("other",)
    intensity_score: float = 5
    volume_score: float = 5
    recovery_needs: str = "moderate"
    training_insights: tuple[str, ...] = ("Unable to analyze training description",)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrainingAnalysis":
        known = {t.value for t in TrainingType}
        types = tuple(str(t) for t in data.get("training_types") or () if str(t) in known)
        return cls(
            training_types=types or ("other",),
            intensity_score=max(1.0, min(10.0, float(data.get("intensity_score", 5)))),
            volume_score=max(1.0, min(10.0, float(data.get("volume_score", 5)))),
            recovery_needs=str(data.get("recovery_needs") or "moderate"),
            training_insights=tuple(str(i) for i in data.get("training_insights") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "training_types": list(self.training_types),
            "intensity_score": self.intensity_score,
            "volume_score": self.volume_score,
            "recovery_needs": self.recovery_needs,
            "training_insights": list(self.training_insights),
        }


class ActivityAssessor:
    """Produces analysis records, asking the AI provider when one is injected.

    Every public method returns a usable result: provider failures and
    unparseable replies are logged and replaced by the deterministic fallback.
    """

    def __init__(self, client: Optional[ChatClient] = None):
        self.client = client

    def analyze(self, profile: UserProfile) -> AIAnalysis:
        """Analyze a complete profile."""
        if self.client is None:
            return fallback_analysis(profile)

        try:
            data = self.client.complete_json(
                prompts.PROFILE_SYSTEM,
                prompts.profile_prompt(profile),
                max_tokens=1000,
                temperature=0.4,
            )
            return AIAnalysis.from_dict(data)
        except (ProviderError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Profile analysis failed, using fallback: %s", e)
            return fallback_analysis(profile)

    def analyze_daily_routine(self, description: str) -> RoutineAnalysis:
        """Analyze a daily routine description."""
        if self.client is None:
            return RoutineAnalysis()

        try:
            data = self.client.complete_json(
                prompts.ROUTINE_SYSTEM,
                prompts.routine_prompt(description),
                max_tokens=500,
                temperature=0.3,
            )
            return RoutineAnalysis.from_dict(data)
        except (ProviderError, TypeError, ValueError) as e:
            logger.warning("Routine analysis failed, using fallback: %s", e)
            return RoutineAnalysis()

    def analyze_training_description(self, description: str) -> TrainingAnalysis:
        """Analyze a training description."""
        if self.client is None:
            return TrainingAnalysis()

        try:
            data = self.client.complete_json(
                prompts.TRAINING_SYSTEM,
                prompts.training_prompt(description, [t.value for t in TrainingType]),
                max_tokens=500,
                temperature=0.3,
            )
            return TrainingAnalysis.from_dict(data)
        except (ProviderError, TypeError, ValueError) as e:
            logger.warning("Training analysis failed, using fallback: %s", e)
            return TrainingAnalysis()
