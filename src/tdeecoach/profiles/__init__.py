"""User profile and result models."""

from tdeecoach.profiles.models import (
    TARGET_GOALS,
    AIAnalysis,
    AIEnhancements,
    BehavioralProfile,
    BMRMethod,
    CalculationResponse,
    Coaching,
    Gender,
    Goal,
    HealthProfile,
    LifestyleProfile,
    MacroTargets,
    MiniPlan,
    TimingRecommendations,
    TrainingIntensity,
    TrainingProfile,
    TrainingType,
    UserProfile,
)

__all__ = [
    "TARGET_GOALS",
    "AIAnalysis",
    "AIEnhancements",
    "BehavioralProfile",
    "BMRMethod",
    "CalculationResponse",
    "Coaching",
    "Gender",
    "Goal",
    "HealthProfile",
    "LifestyleProfile",
    "MacroTargets",
    "MiniPlan",
    "TimingRecommendations",
    "TrainingIntensity",
    "TrainingProfile",
    "TrainingType",
    "UserProfile",
]
