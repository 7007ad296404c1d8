"""Deterministic BMR, TDEE and macro calculation engine."""

from tdeecoach.calculator.activity import calculate_activity_factor, calculate_tdee
from tdeecoach.calculator.bmr import calculate_bmr
from tdeecoach.calculator.confidence import calculate_confidence_score
from tdeecoach.calculator.engine import calculate
from tdeecoach.calculator.macros import calculate_all_targets, calculate_macro_targets
from tdeecoach.calculator.timing import calculate_timing_recommendations, macro_profile_hint

__all__ = [
    "calculate",
    "calculate_activity_factor",
    "calculate_all_targets",
    "calculate_bmr",
    "calculate_confidence_score",
    "calculate_macro_targets",
    "calculate_tdee",
    "calculate_timing_recommendations",
    "macro_profile_hint",
]
