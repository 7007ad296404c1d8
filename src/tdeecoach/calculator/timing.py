"""Nutrient timing recommendations from training type and eating habits."""

from __future__ import annotations

from tdeecoach.profiles.models import TimingRecommendations, UserProfile

DEFAULT_PRE_WORKOUT = "Eat a small meal 1-2 hours before training with carbs and protein."
DEFAULT_POST_WORKOUT = "Eat protein and carbs within 30-60 minutes after training."

# Checked in order; the first training type the profile has wins
WORKOUT_TIMING = (
    (
        "powerlifting",
        "Eat a light meal 2-3 hours before with carbs and protein. Consider caffeine 30-60 minutes before.",
        "Eat a meal with protein and carbs within 30 minutes. Consider a protein shake if meal is delayed.",
    ),
    (
        "running",
        "Eat easily digestible carbs 1-2 hours before. Consider a banana or toast with honey.",
        "Eat carbs and protein within 30 minutes. Focus on replenishing glycogen stores.",
    ),
    (
        "yoga",
        "Eat a light meal 2-3 hours before. Avoid heavy foods that might cause discomfort.",
        "Eat a balanced meal within 1-2 hours. Focus on whole foods and hydration.",
    ),
)

DEFAULT_MEAL_TIMING = "Eat 3-4 meals per day with consistent timing."
FREQUENT_MEALS_TIMING = "Eat 6+ smaller meals throughout the day to maintain energy levels."
NIGHT_OWL_TIMING = "Eat your largest meal in the evening when you're most active and hungry."

HYDRATION = "Drink 3-4 liters of water daily. Add electrolytes during intense training."
SLEEP_OPTIMIZATION = "Avoid large meals 2-3 hours before bed. Consider a small protein snack if needed."


def calculate_timing_recommendations(profile: UserProfile) -> TimingRecommendations:
    """Select canned timing advice for a profile."""
    training_types = profile.training.training_types

    pre_workout, post_workout = DEFAULT_PRE_WORKOUT, DEFAULT_POST_WORKOUT
    for training_type, pre, post in WORKOUT_TIMING:
        if training_type in training_types:
            pre_workout, post_workout = pre, post
            break

    behavioral = profile.behavioral
    if behavioral.meal_frequency == "6+_meals":
        meal_timing = FREQUENT_MEALS_TIMING
    elif behavioral.meal_timing_preference == "night_owl":
        meal_timing = NIGHT_OWL_TIMING
    else:
        meal_timing = DEFAULT_MEAL_TIMING

    return TimingRecommendations(
        pre_workout=pre_workout,
        post_workout=post_workout,
        meal_timing=meal_timing,
        hydration=HYDRATION,
        sleep_optimization=SLEEP_OPTIMIZATION,
    )


def macro_profile_hint(profile: UserProfile) -> str:
    """Short label describing the macro emphasis for the training style."""
    types = profile.training.training_types

    if "powerlifting" in types or "bodybuilding" in types:
        return "higher_protein_strength_training"
    if "running" in types or "cycling" in types:
        return "higher_carbs_endurance"
    if "crossfit" in types:
        return "balanced_high_intensity"
    if "yoga" in types or "pilates" in types:
        return "moderate_protein_flexibility"
    return "balanced_general_fitness"
