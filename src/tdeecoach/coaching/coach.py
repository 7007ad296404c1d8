"""Coaching notes, risk flags, success strategies and mini-plans.

Rule-based output is always available. When an AI client is injected the
coaching note and mini-plan are generated by the provider, with the rule-based
versions used whenever a call fails.
"""

from __future__ import annotations

import logging
from typing import Optional

from tdeecoach.calculator.rounding import round_half_up
from tdeecoach.errors import ProviderError
from tdeecoach.llm import prompts
from tdeecoach.llm.client import ChatClient
from tdeecoach.profiles.models import (
    AIAnalysis,
    Coaching,
    MacroTargets,
    MiniPlan,
    UserProfile,
)

logger = logging.getLogger(__name__)

DEFAULT_HABITS = (
    "Track food intake for 5 days",
    "Hit protein target daily",
    "Get 7+ hours of sleep",
)
DEFAULT_SUCCESS_METRICS = (
    "Hit protein target 5/7 days",
    "Complete all planned workouts",
    "Maintain sleep schedule",
)
DEFAULT_WEEKLY_FOCUS = "Build consistency with tracking and training"


def basic_coach_note(profile: UserProfile, tdee: int) -> str:
    """Templated coaching note for the profile's goal."""
    name = profile.name or "there"
    goal = profile.goal

    if goal == "fat_loss":
        return (
            f"Hi {name}! Your TDEE is {tdee} calories, so for fat loss, aim for "
            f"{round_half_up(tdee * 0.8)} calories daily. Focus on high protein (2.2g/kg), "
            "resistance training 3-4x/week, and consistent sleep. Track progress "
            "weekly and adjust as needed. You've got this!"
        )
    if goal == "muscle_gain":
        return (
            f"Hi {name}! Your TDEE is {tdee} calories, so for muscle gain, aim for "
            f"{round_half_up(tdee * 1.12)} calories daily. Prioritize protein (2.2g/kg), "
            "progressive overload, and adequate recovery. Expect 0.5-1lb gain per "
            "month. Let's build some muscle!"
        )
    if goal == "recomposition":
        return (
            f"Hi {name}! Your TDEE is {tdee} calories for body recomposition. Focus "
            "on high protein (2.4g/kg), strength training, and patience. This takes "
            "time but yields amazing results. Stay consistent and trust the process!"
        )
    return (
        f"Hi {name}! Your TDEE is {tdee} calories for maintenance. Focus on "
        "consistent protein intake (2g/kg), regular exercise, and sustainable "
        "habits. Monitor weight trends and adjust calories by 100-200 if needed. "
        "Keep up the great work!"
    )


def generate_risk_flags(profile: UserProfile, analysis: AIAnalysis) -> list[str]:
    """Rule-based risk flags."""
    health = profile.health
    risks = profile.behavioral.adherence_risks
    flags = []

    if analysis.adherence_score < 5:
        flags.append("Low adherence risk - focus on building sustainable habits")
    if health.stress_level in ("high", "very_high"):
        flags.append("High stress levels may impact recovery and adherence")
    if health.sleep_hours_per_night < 6 or health.sleep_quality == "poor":
        flags.append("Inadequate sleep may affect metabolism and recovery")
    if profile.goal == "fat_loss" and profile.weight_kg < 60:
        flags.append("Low body weight - ensure adequate calorie intake")
    if profile.training.training_frequency_per_week > 6:
        flags.append("High training volume - prioritize recovery and nutrition")
    if health.medical_conditions:
        flags.append("Medical conditions present - consult healthcare provider")
    if "weekend_binges" in risks:
        flags.append("Weekend eating patterns may impact progress")
    if "stress_eating" in risks:
        flags.append("Stress eating may interfere with goals")

    return flags


def generate_success_strategies(profile: UserProfile, analysis: AIAnalysis) -> list[str]:
    """Rule-based success strategies."""
    health = profile.health
    behavioral = profile.behavioral
    strategies = []

    if analysis.adherence_score >= 8:
        strategies.append("Strong adherence potential - focus on optimization and progression")
    if health.sleep_hours_per_night >= 7 and health.sleep_quality == "good":
        strategies.append("Excellent sleep foundation - leverage for recovery and metabolism")
    if health.stress_level in ("low", "very_low"):
        strategies.append("Low stress environment - ideal for consistent progress")
    if profile.training.training_experience_years > 3:
        strategies.append("Training experience - focus on advanced techniques and optimization")
    if behavioral.support_system == "strong":
        strategies.append("Strong support system - leverage for accountability and motivation")
    if behavioral.meal_prep_frequency in ("often", "always"):
        strategies.append("Meal prep experience - optimize for consistency and adherence")

    return strategies


def fallback_mini_plan(profile: UserProfile) -> MiniPlan:
    """Rule-based one-week plan."""
    goal = profile.goal
    weekly_sessions = int(min(profile.training.training_frequency_per_week, 4))

    if goal == "fat_loss":
        template, step_target, protein_per_kg = "Upper/Lower x2 + Cardio x2", "10-12k", 2.2
    elif goal == "muscle_gain":
        template, step_target, protein_per_kg = "Push/Pull/Legs x2", "6-8k", 2.2
    else:
        template, step_target, protein_per_kg = "Full body x2-3", "8-10k", 2.0

    return MiniPlan(
        weekly_sessions=weekly_sessions,
        training_template=template,
        step_target=step_target,
        protein_minimum_g=round_half_up(profile.weight_kg * protein_per_kg),
        habits=DEFAULT_HABITS,
        weekly_focus=DEFAULT_WEEKLY_FOCUS,
        success_metrics=DEFAULT_SUCCESS_METRICS,
    )


class CoachingSystem:
    """Builds the coaching block of a calculation response."""

    def __init__(self, client: Optional[ChatClient] = None):
        self.client = client

    def coaching_note(
        self,
        profile: UserProfile,
        analysis: AIAnalysis,
        tdee: int,
        targets: dict[str, MacroTargets],
    ) -> str:
        """Personalized note from the provider, or the templated note."""
        if self.client is None:
            return basic_coach_note(profile, tdee)

        try:
            return self.client.complete(
                prompts.COACH_NOTE_SYSTEM,
                prompts.coach_note_prompt(profile, analysis, tdee, targets),
                max_tokens=300,
                temperature=0.7,
            )
        except ProviderError as e:
            logger.warning("Coaching note generation failed, using template: %s", e)
            return basic_coach_note(profile, tdee)

    def mini_plan(self, profile: UserProfile, analysis: Optional[AIAnalysis]) -> MiniPlan:
        """Mini-plan from the provider, or the rule-based plan."""
        if self.client is None:
            return fallback_mini_plan(profile)

        try:
            data = self.client.complete_json(
                prompts.MINI_PLAN_SYSTEM,
                prompts.mini_plan_prompt(profile, analysis),
                max_tokens=500,
                temperature=0.6,
            )
            return MiniPlan.from_dict(data)
        except (ProviderError, KeyError, TypeError, ValueError) as e:
            logger.warning("Mini-plan generation failed, using fallback: %s", e)
            return fallback_mini_plan(profile)

    def build(
        self,
        profile: UserProfile,
        tdee: int,
        targets: dict[str, MacroTargets],
        analysis: Optional[AIAnalysis] = None,
        include_mini_plan: bool = True,
    ) -> Coaching:
        """Assemble the coaching block.

        The templated note is always present. Risk flags, success strategies
        and the mini-plan need an analysis record; the personalized note also
        needs an AI client.
        """
        coach_note = basic_coach_note(profile, tdee)
        if analysis is None:
            return Coaching(coach_note=coach_note)

        ai_coach_note = None
        if self.client is not None:
            ai_coach_note = self.coaching_note(profile, analysis, tdee, targets)

        return Coaching(
            coach_note=coach_note,
            ai_coach_note=ai_coach_note,
            mini_plan=self.mini_plan(profile, analysis) if include_mini_plan else None,
            risk_flags=tuple(generate_risk_flags(profile, analysis)),
            success_strategies=tuple(generate_success_strategies(profile, analysis)),
        )
