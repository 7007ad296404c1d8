"""Request payload validation.

Runs on the raw JSON body, before it is parsed into a UserProfile, and
collects every problem instead of stopping at the first.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from tdeecoach.profiles.models import VALID_GENDERS, VALID_GOALS

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

AGE_RANGE = (16, 100)
HEIGHT_RANGE = (100, 250)
WEIGHT_RANGE = (30, 300)
BODY_FAT_RANGE = (3, 50)


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_RE.match(email) is not None


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _in_range(value: Any, bounds: tuple[float, float]) -> bool:
    number = _as_number(value)
    return number is not None and bounds[0] <= number <= bounds[1]


def validate_profile_payload(data: Any) -> list[str]:
    """Check a profile payload.

    Args:
        data: Raw profile object from a request body

    Returns:
        Error messages; empty when the payload is valid
    """
    if not isinstance(data, dict):
        return ["Profile is required"]

    errors = []

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Name is required")

    if not is_valid_email(data.get("email")):
        errors.append("Valid email is required")

    if not _in_range(data.get("age"), AGE_RANGE):
        errors.append("Age must be between 16 and 100")

    if str(data.get("gender") or "").lower() not in VALID_GENDERS:
        errors.append("Gender must be male, female, or other")

    height = data.get("height_cm", data.get("height"))
    if not _in_range(height, HEIGHT_RANGE):
        errors.append("Height must be between 100 and 250 cm")

    weight = data.get("weight_kg", data.get("weight"))
    if not _in_range(weight, WEIGHT_RANGE):
        errors.append("Weight must be between 30 and 300 kg")

    if str(data.get("goal") or "").lower() not in VALID_GOALS:
        errors.append(
            "Goal must be fat_loss, muscle_gain, maintenance, recomposition, or performance"
        )

    # 0 and missing both mean "not measured"
    body_fat = data.get("body_fat_percent")
    if body_fat not in (None, "", 0) and not _in_range(body_fat, BODY_FAT_RANGE):
        errors.append("Body fat percentage must be between 3 and 50")

    return errors
