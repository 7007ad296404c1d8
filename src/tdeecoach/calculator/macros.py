"""Macro target derivation.

Steps:
1. Apply the goal-based calorie adjustment to TDEE
2. Set protein from a goal base (g/kg) plus training, sex and experience
   adjustments, never below 1.6 g/kg
3. Set fat at 25% of calories, but at least 0.5 g/kg
4. Give the remaining calories to carbohydrates
5. Convert each macro to a share of calories using 4/9/4 kcal per gram

References:
- ISSN Position Stand: protein and exercise (2017)
"""

from __future__ import annotations

from tdeecoach.calculator.rounding import round_half_up
from tdeecoach.profiles.models import TARGET_GOALS, MacroTargets, TrainingProfile, UserProfile

CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}

# Multiplier on TDEE; goals not listed eat at maintenance
GOAL_CALORIE_MULTIPLIERS = {
    "fat_loss": 0.8,  # 20% deficit
    "muscle_gain": 1.12,  # 12% surplus
}

# Protein base by goal (g per kg body weight)
BASE_PROTEIN_PER_KG = {
    "fat_loss": 2.2,
    "muscle_gain": 2.2,
    "recomposition": 2.4,
    "maintenance": 2.0,
}
DEFAULT_PROTEIN_PER_KG = 2.0

# Protein delta for the primary training type (g/kg)
TRAINING_PROTEIN_ADJUSTMENTS = {
    "powerlifting": 0.2,
    "bodybuilding": 0.3,
    "crossfit": 0.2,
    "running": -0.2,
    "cycling": -0.1,
    "swimming": 0.1,
    "yoga": -0.3,
    "pilates": -0.3,
    "martial_arts": 0.1,
    "team_sports": 0.1,
    "hiking": -0.1,
    "dancing": 0.0,
    "climbing": 0.1,
}

MALE_PROTEIN_BONUS = 0.1
EXPERIENCE_PROTEIN_BONUS = 0.1
EXPERIENCE_PROTEIN_YEARS = 5
MIN_PROTEIN_PER_KG = 1.6

FAT_CALORIE_SHARE = 0.25
MIN_FAT_PER_KG = 0.5


def target_calories(tdee: int, goal: str) -> int:
    """Apply the goal's calorie adjustment to TDEE."""
    multiplier = GOAL_CALORIE_MULTIPLIERS.get(goal)
    if multiplier is None:
        return tdee
    return round_half_up(tdee * multiplier)


def protein_per_kg(training: TrainingProfile, goal: str, is_male: bool) -> float:
    """Protein requirement in g/kg for a goal and training background."""
    base = BASE_PROTEIN_PER_KG.get(goal, DEFAULT_PROTEIN_PER_KG)

    primary = training.primary_type
    training_delta = TRAINING_PROTEIN_ADJUSTMENTS.get(primary, 0.0) if primary else 0.0

    sex_bonus = MALE_PROTEIN_BONUS if is_male else 0.0
    experience_bonus = (
        EXPERIENCE_PROTEIN_BONUS
        if training.training_experience_years > EXPERIENCE_PROTEIN_YEARS
        else 0.0
    )

    return max(MIN_PROTEIN_PER_KG, base + training_delta + sex_bonus + experience_bonus)


def calculate_protein(profile: UserProfile, goal: str) -> int:
    """Daily protein target in grams."""
    per_kg = protein_per_kg(profile.training, goal, profile.is_male)
    return round_half_up(profile.weight_kg * per_kg)


def _percent(part: float, whole: float) -> int:
    if whole == 0:
        return 0
    return round_half_up(part / whole * 100)


def calculate_macro_targets(tdee: int, profile: UserProfile, goal: str) -> MacroTargets:
    """Calculate calorie and macro targets for one goal.

    Carbohydrates take whatever is left after protein and fat, so carb_g can
    be negative for very low calorie, high protein profiles. The accuracy
    validator reports that case instead of the calculator hiding it.

    Args:
        tdee: Total Daily Energy Expenditure (kcal/day)
        profile: User profile
        goal: One of TARGET_GOALS; anything else is treated as maintenance

    Returns:
        MacroTargets for the goal
    """
    calories = target_calories(tdee, goal)

    protein_g = calculate_protein(profile, goal)
    protein_calories = protein_g * CALORIES_PER_GRAM["protein"]

    fat_calories = max(
        calories * FAT_CALORIE_SHARE,
        profile.weight_kg * MIN_FAT_PER_KG * CALORIES_PER_GRAM["fat"],
    )
    fat_g = round_half_up(fat_calories / CALORIES_PER_GRAM["fat"])

    carb_calories = calories - protein_calories - fat_calories
    carb_g = round_half_up(carb_calories / CALORIES_PER_GRAM["carbs"])

    return MacroTargets(
        calories=calories,
        protein_g=protein_g,
        fat_g=fat_g,
        carb_g=carb_g,
        protein_percent=_percent(protein_calories, calories),
        fat_percent=_percent(fat_calories, calories),
        carb_percent=_percent(carb_calories, calories),
    )


def calculate_all_targets(tdee: int, profile: UserProfile) -> dict[str, MacroTargets]:
    """Calculate targets for every goal in TARGET_GOALS."""
    return {goal: calculate_macro_targets(tdee, profile, goal) for goal in TARGET_GOALS}
