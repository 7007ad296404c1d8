"""Heuristic confidence score for how complete a profile is."""

from __future__ import annotations

from typing import Optional

from tdeecoach.profiles.models import AIAnalysis, UserProfile

BASE_CONFIDENCE = 7.0
DETAILED_DESCRIPTION_CHARS = 50


def calculate_confidence_score(
    profile: UserProfile,
    analysis: Optional[AIAnalysis] = None,
) -> float:
    """Score profile completeness on a 1-10 scale.

    Base 7, +1 for measured body fat, +1 each for detailed routine and
    training descriptions, +1 when an analysis record is present and +0.5
    for more than two years of training.
    """
    body_fat = 1.0 if profile.body_fat_percent and profile.body_fat_percent > 0 else 0.0
    routine = (
        1.0
        if len(profile.lifestyle.daily_routine_description) > DETAILED_DESCRIPTION_CHARS
        else 0.0
    )
    training = (
        1.0
        if len(profile.training.training_description) > DETAILED_DESCRIPTION_CHARS
        else 0.0
    )
    ai = 1.0 if analysis is not None else 0.0
    experience = 0.5 if profile.training.training_experience_years > 2 else 0.0

    score = BASE_CONFIDENCE + body_fat + routine + training + ai + experience
    return min(10.0, max(1.0, score))
