"""Profile analysis records and their deterministic fallback."""

from tdeecoach.analysis.assessor import (
    ActivityAssessor,
    RoutineAnalysis,
    TrainingAnalysis,
    fallback_analysis,
)

__all__ = [
    "ActivityAssessor",
    "RoutineAnalysis",
    "TrainingAnalysis",
    "fallback_analysis",
]
