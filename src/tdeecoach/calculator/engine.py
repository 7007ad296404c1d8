"""Assemble a full CalculationResponse for one profile."""

from __future__ import annotations

from typing import Optional

from tdeecoach.calculator.activity import calculate_activity_factor, calculate_tdee
from tdeecoach.calculator.bmr import calculate_bmr
from tdeecoach.calculator.confidence import calculate_confidence_score
from tdeecoach.calculator.macros import calculate_all_targets
from tdeecoach.calculator.timing import calculate_timing_recommendations, macro_profile_hint
from tdeecoach.coaching.coach import CoachingSystem
from tdeecoach.profiles.models import (
    AIAnalysis,
    AIEnhancements,
    CalculationResponse,
    Coaching,
    UserProfile,
)

RECOMMENDED_DEFICIT_PERCENT = 0.2


def calculate(
    profile: UserProfile,
    analysis: Optional[AIAnalysis] = None,
    *,
    include_coaching: bool = True,
    include_mini_plan: bool = True,
    coaching: Optional[CoachingSystem] = None,
) -> CalculationResponse:
    """Run BMR, TDEE, macro, timing and coaching calculations.

    Args:
        profile: User profile
        analysis: Optional analysis record. When given, its activity
            adjustment feeds the activity factor and the response carries an
            ai_enhancements block.
        include_coaching: Whether to fill the coaching block
        include_mini_plan: Whether coaching includes a mini-plan
        coaching: Coaching system to use; defaults to the rule-based one

    Returns:
        CalculationResponse
    """
    bmr, method = calculate_bmr(profile)
    activity_factor = calculate_activity_factor(profile, analysis)
    tdee = calculate_tdee(bmr, activity_factor)
    targets = calculate_all_targets(tdee, profile)

    enhancements = None
    if analysis is not None:
        enhancements = AIEnhancements(
            adjusted_tdee=tdee,
            activity_factor_adjustment=analysis.activity_factor_adjustment,
            recommended_deficit_percent=RECOMMENDED_DEFICIT_PERCENT,
            macro_profile_hint=macro_profile_hint(profile),
            timing_recommendations=calculate_timing_recommendations(profile),
        )

    coaching_block = Coaching()
    if include_coaching:
        coaching_system = coaching or CoachingSystem()
        coaching_block = coaching_system.build(
            profile,
            tdee,
            targets,
            analysis=analysis,
            include_mini_plan=include_mini_plan,
        )

    return CalculationResponse(
        bmr=bmr,
        tdee=tdee,
        method_used=method,
        targets=targets,
        coaching=coaching_block,
        confidence_score=calculate_confidence_score(profile, analysis),
        ai_enhancements=enhancements,
    )
