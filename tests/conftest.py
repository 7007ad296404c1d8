"""Pytest fixtures for tdeecoach tests."""

from __future__ import annotations

import copy
from typing import Any, Optional

import pytest

from tdeecoach.errors import ProviderError
from tdeecoach.profiles.models import UserProfile
from tdeecoach.validation.suite import CANNED_PROFILES


class FakeClient:
    """Stand-in for ChatClient that records calls and returns canned replies.

    ``replies`` is consumed in order; a ProviderError instance in the list is
    raised instead of returned.
    """

    def __init__(self, replies: Optional[list[Any]] = None, error: Optional[Exception] = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def _next(self, system: str, prompt: str) -> Any:
        self.calls.append((system, prompt))
        if self.error is not None:
            raise self.error
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def complete(self, system: str, prompt: str, **kwargs: Any) -> str:
        return self._next(system, prompt)

    def complete_json(self, system: str, prompt: str, **kwargs: Any) -> dict[str, Any]:
        return self._next(system, prompt)


@pytest.fixture
def standard_male_data() -> dict[str, Any]:
    """Payload for a 30 year old male lifter with a desk job."""
    return copy.deepcopy(CANNED_PROFILES["standard_male_lifter"])


@pytest.fixture
def standard_male(standard_male_data) -> UserProfile:
    return UserProfile.from_dict(standard_male_data)


@pytest.fixture
def low_weight_female_data() -> dict[str, Any]:
    """Payload for a light, sedentary, poorly sleeping student on a cut."""
    return {
        "name": "Test Female",
        "email": "test@example.com",
        "age": 25,
        "gender": "female",
        "height": 165,
        "weight": 50,
        "goal": "fat_loss",
        "lifestyle": {
            "daily_routine_description": "Student, mostly sedentary",
            "job_type": "student",
            "job_activity_level": "sedentary",
            "commute_type": "walking",
            "household_activity_level": "minimal",
            "fidgeting_level": "very_still",
            "standing_vs_sitting": "mostly_sitting",
        },
        "training": {
            "training_description": "No regular training",
            "training_types": [],
            "training_frequency_per_week": 0,
            "training_duration_minutes": 0,
            "training_intensity": "low",
            "training_experience_years": 0,
        },
        "health": {
            "sleep_hours_per_night": 5,
            "sleep_quality": "poor",
            "stress_level": "very_high",
            "medical_conditions": ["anxiety"],
        },
        "behavioral": {
            "meal_frequency": "1-2_meals",
            "meal_timing_preference": "irregular",
            "meal_prep_frequency": "never",
            "adherence_risks": ["stress_eating", "weekend_binges", "social_events"],
            "motivation_level": "low",
            "support_system": "none",
        },
    }


@pytest.fixture
def low_weight_female(low_weight_female_data) -> UserProfile:
    return UserProfile.from_dict(low_weight_female_data)


@pytest.fixture
def fake_client():
    """Factory for FakeClient instances."""
    return FakeClient


@pytest.fixture
def failing_client() -> FakeClient:
    """Client whose every call fails like an unreachable provider."""
    return FakeClient(error=ProviderError("Provider returned HTTP 503", status_code=503))
