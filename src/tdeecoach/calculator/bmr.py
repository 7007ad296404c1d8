"""Basal Metabolic Rate estimation.

Picks the most specific formula the profile supports:

- Katch-McArdle when a measured body fat percentage is available
- Cunningham for strength athletes and experienced trainees, using an
  assumed body fat percentage
- Mifflin-St Jeor otherwise, as it's the most widely validated equation
  for resting metabolic rate
"""

from __future__ import annotations

from tdeecoach.calculator.rounding import round_half_up
from tdeecoach.profiles.models import BMRMethod, UserProfile

# Assumed body fat (%) when estimating lean mass for Cunningham
ASSUMED_BODY_FAT_MALE = 15
ASSUMED_BODY_FAT_FEMALE = 25

STRENGTH_TRAINING_TYPES = ("powerlifting", "bodybuilding")
CUNNINGHAM_MIN_EXPERIENCE_YEARS = 3


def lean_body_mass(weight_kg: float, body_fat_percent: float) -> float:
    """Return lean body mass in kg."""
    return weight_kg * (1 - body_fat_percent / 100)


def katch_mcardle(weight_kg: float, body_fat_percent: float) -> float:
    """BMR = 370 + 21.6 × LBM(kg)"""
    return 370 + 21.6 * lean_body_mass(weight_kg, body_fat_percent)


def cunningham(weight_kg: float, is_male: bool) -> float:
    """BMR = 500 + 22 × LBM(kg), with LBM from an assumed body fat."""
    body_fat = ASSUMED_BODY_FAT_MALE if is_male else ASSUMED_BODY_FAT_FEMALE
    return 500 + 22 * lean_body_mass(weight_kg, body_fat)


def mifflin_st_jeor(weight_kg: float, height_cm: float, age: int, is_male: bool) -> float:
    """Calculate BMR using the Mifflin-St Jeor equation.

    Male:   BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Other:  BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161
    """
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if is_male:
        bmr += 5
    else:
        bmr -= 161
    return bmr


def has_usable_body_fat(profile: UserProfile) -> bool:
    """True when body fat is present and inside (0, 50)."""
    body_fat = profile.body_fat_percent
    return body_fat is not None and 0 < body_fat < 50


def calculate_bmr(profile: UserProfile) -> tuple[int, BMRMethod]:
    """Estimate BMR and report which formula was used.

    Args:
        profile: User profile

    Returns:
        Tuple of (BMR in kcal/day rounded to an integer, method)
    """
    if has_usable_body_fat(profile):
        bmr = katch_mcardle(profile.weight_kg, profile.body_fat_percent)
        return round_half_up(bmr), BMRMethod.KATCH_MCARDLE

    training = profile.training
    is_strength_athlete = any(
        t in STRENGTH_TRAINING_TYPES for t in training.training_types
    )
    if is_strength_athlete or training.training_experience_years > CUNNINGHAM_MIN_EXPERIENCE_YEARS:
        bmr = cunningham(profile.weight_kg, profile.is_male)
        return round_half_up(bmr), BMRMethod.CUNNINGHAM

    bmr = mifflin_st_jeor(
        profile.weight_kg, profile.height_cm, profile.age, profile.is_male
    )
    return round_half_up(bmr), BMRMethod.MIFFLIN_ST_JEOR
