"""Coaching output: notes, risk flags, success strategies and mini-plans."""

from tdeecoach.coaching.coach import (
    CoachingSystem,
    basic_coach_note,
    fallback_mini_plan,
    generate_risk_flags,
    generate_success_strategies,
)

__all__ = [
    "CoachingSystem",
    "basic_coach_note",
    "fallback_mini_plan",
    "generate_risk_flags",
    "generate_success_strategies",
]
