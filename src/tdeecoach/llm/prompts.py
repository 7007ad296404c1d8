"""Prompt templates for the AI provider.

Templates use ``string.Template`` placeholders and are filled with
``safe_substitute`` so a missing value never raises.
"""

from __future__ import annotations

from string import Template
from typing import Optional

from tdeecoach.profiles.models import AIAnalysis, MacroTargets, UserProfile

ROUTINE_SYSTEM = (
    "You are an expert in human activity assessment and metabolism. Analyze daily "
    "routines to determine activity levels and NEAT (Non-Exercise Activity Thermogenesis)."
)

TRAINING_SYSTEM = (
    "You are an expert in exercise science and training analysis. Identify training "
    "types, assess intensity and volume, and determine recovery needs."
)

PROFILE_SYSTEM = (
    "You are an expert in human metabolism, exercise science, and behavioral psychology. "
    "Provide comprehensive analysis of user profiles for nutrition and training optimization."
)

COACH_NOTE_SYSTEM = (
    "You are an expert personal trainer and nutritionist. Write personalized, encouraging "
    "coaching notes that are specific, actionable, and motivating."
)

MINI_PLAN_SYSTEM = (
    "You are an expert personal trainer. Create realistic, achievable mini-plans that "
    "consider the user's lifestyle, experience, and challenges."
)

ROUTINE_TEMPLATE = Template("""Analyze this daily routine description and provide insights:

User Description: "$DESCRIPTION"

Reply with a single JSON object with:
1. activity_score: 1-10 scale (1=very sedentary, 10=very active)
2. neat_estimate: estimated NEAT calories per day (100-800 range)
3. job_activity_level: "sedentary", "light", "moderate", "active", or "very_active"
4. lifestyle_insights: array of 3-5 key insights about their activity patterns

Consider sitting vs standing time, walking, job demands, commute, household
activities, leisure and fidgeting.""")

TRAINING_TEMPLATE = Template("""Analyze this training description and provide insights:

User Description: "$DESCRIPTION"

Reply with a single JSON object with:
1. training_types: array of types from this list: [$TRAINING_TYPES]
2. intensity_score: 1-10 scale
3. volume_score: 1-10 scale
4. recovery_needs: "low", "moderate", "high", or "very_high"
5. training_insights: array of 3-5 key insights about their training""")

PROFILE_TEMPLATE = Template("""Analyze this complete user profile and provide comprehensive insights:

USER PROFILE:
- Age: $AGE, Gender: $GENDER
- Weight: ${WEIGHT}kg, Height: ${HEIGHT}cm
- Body Fat: $BODY_FAT
- Goal: $GOAL

LIFESTYLE:
- Daily Routine: "$ROUTINE"
- Job: $JOB_TYPE ($JOB_ACTIVITY)
- Commute: $COMMUTE
- Household: $HOUSEHOLD
- Fidgeting: $FIDGETING
- Standing vs Sitting: $STANDING

TRAINING:
- Training Description: "$TRAINING_DESCRIPTION"
- Types: $TRAINING_TYPES
- Frequency: ${FREQUENCY}x/week
- Duration: $DURATION minutes
- Intensity: $INTENSITY
- Experience: $EXPERIENCE years

HEALTH:
- Sleep: $SLEEP_HOURS hours ($SLEEP_QUALITY quality)
- Stress: $STRESS
- Medical: $MEDICAL

BEHAVIORAL:
- Meal Frequency: $MEAL_FREQUENCY
- Adherence Risks: $ADHERENCE_RISKS
- Motivation: $MOTIVATION

Reply with a single JSON object:
{
  "estimated_neat": number (100-800),
  "activity_factor_adjustment": number (-0.2 to +0.2),
  "lifestyle_activity_score": number (1-10),
  "training_intensity_score": number (1-10),
  "training_volume_score": number (1-10),
  "recovery_needs": "low" | "moderate" | "high" | "very_high",
  "estimated_metabolic_rate": number (estimated BMR),
  "metabolic_efficiency": "low" | "normal" | "high",
  "adaptation_risk": "low" | "moderate" | "high",
  "adherence_score": number (1-10),
  "risk_factors": string[],
  "success_factors": string[],
  "recommended_approach": string,
  "key_focus_areas": string[],
  "potential_challenges": string[]
}""")

COACH_NOTE_TEMPLATE = Template("""Generate a personalized coaching note for this user:

USER PROFILE:
- Name: $NAME
- Age: $AGE, Gender: $GENDER
- Weight: ${WEIGHT}kg, Height: ${HEIGHT}cm
- Goal: $GOAL
- TDEE: $TDEE calories

TARGETS:
$TARGETS

ANALYSIS:
- Lifestyle Score: $LIFESTYLE_SCORE/10
- Training Score: $TRAINING_SCORE/10
- Adherence Score: $ADHERENCE_SCORE/10
- Risk Factors: $RISK_FACTORS
- Success Factors: $SUCCESS_FACTORS

LIFESTYLE:
- Daily Routine: "$ROUTINE"
- Training: "$TRAINING_DESCRIPTION"
- Sleep: $SLEEP_HOURS hours ($SLEEP_QUALITY)
- Stress: $STRESS
- Adherence Risks: $ADHERENCE_RISKS

Write a personalized coaching note (3-5 sentences) that acknowledges their
situation and goal, gives targeted advice, addresses their main challenges,
encourages them and sets realistic expectations. Use their name if provided.""")

MINI_PLAN_TEMPLATE = Template("""Generate a personalized 7-day mini-plan for this user:

USER PROFILE:
- Goal: $GOAL
- Weight: ${WEIGHT}kg
- Training: $TRAINING_TYPES
- Frequency: ${FREQUENCY}x/week
- Experience: $EXPERIENCE years
- Adherence Score: $ADHERENCE_SCORE/10
- Risk Factors: $RISK_FACTORS

LIFESTYLE:
- Job: $JOB_TYPE
- Sleep: $SLEEP_HOURS hours
- Meal Frequency: $MEAL_FREQUENCY
- Cooking Ability: $COOKING_ABILITY

Reply with a single JSON object:
{
  "weekly_sessions": number,
  "training_template": string,
  "step_target": string,
  "protein_minimum_g": number,
  "habits": [string, string, string],
  "weekly_focus": string,
  "success_metrics": [string, string, string]
}""")


def _join(values, empty: str = "None") -> str:
    return ", ".join(values) if values else empty


def routine_prompt(description: str) -> str:
    return ROUTINE_TEMPLATE.safe_substitute(DESCRIPTION=description)


def training_prompt(description: str, training_types: list[str]) -> str:
    quoted = ", ".join(f'"{t}"' for t in training_types)
    return TRAINING_TEMPLATE.safe_substitute(DESCRIPTION=description, TRAINING_TYPES=quoted)


def profile_prompt(profile: UserProfile) -> str:
    """Fill the full-profile analysis prompt."""
    lifestyle, training = profile.lifestyle, profile.training
    health, behavioral = profile.health, profile.behavioral
    body_fat = (
        f"{profile.body_fat_percent}%"
        if profile.body_fat_percent is not None
        else "Not provided"
    )
    return PROFILE_TEMPLATE.safe_substitute(
        AGE=profile.age,
        GENDER=profile.gender,
        WEIGHT=profile.weight_kg,
        HEIGHT=profile.height_cm,
        BODY_FAT=body_fat,
        GOAL=profile.goal,
        ROUTINE=lifestyle.daily_routine_description,
        JOB_TYPE=lifestyle.job_type or "unknown",
        JOB_ACTIVITY=lifestyle.job_activity_level or "unknown",
        COMMUTE=lifestyle.commute_type or "unknown",
        HOUSEHOLD=lifestyle.household_activity_level or "unknown",
        FIDGETING=lifestyle.fidgeting_level or "unknown",
        STANDING=lifestyle.standing_vs_sitting or "unknown",
        TRAINING_DESCRIPTION=training.training_description,
        TRAINING_TYPES=_join(training.training_types),
        FREQUENCY=training.training_frequency_per_week,
        DURATION=training.training_duration_minutes,
        INTENSITY=training.training_intensity or "unknown",
        EXPERIENCE=training.training_experience_years,
        SLEEP_HOURS=health.sleep_hours_per_night,
        SLEEP_QUALITY=health.sleep_quality or "unknown",
        STRESS=health.stress_level or "unknown",
        MEDICAL=_join(health.medical_conditions),
        MEAL_FREQUENCY=behavioral.meal_frequency or "unknown",
        ADHERENCE_RISKS=_join(behavioral.adherence_risks),
        MOTIVATION=behavioral.motivation_level or "unknown",
    )


def coach_note_prompt(
    profile: UserProfile,
    analysis: AIAnalysis,
    tdee: int,
    targets: dict[str, MacroTargets],
) -> str:
    """Fill the coaching note prompt."""
    target_lines = "\n".join(
        f"- {goal.replace('_', ' ').title()}: {t.calories} calories"
        for goal, t in targets.items()
    )
    return COACH_NOTE_TEMPLATE.safe_substitute(
        NAME=profile.name or "Not provided",
        AGE=profile.age,
        GENDER=profile.gender,
        WEIGHT=profile.weight_kg,
        HEIGHT=profile.height_cm,
        GOAL=profile.goal,
        TDEE=tdee,
        TARGETS=target_lines,
        LIFESTYLE_SCORE=analysis.lifestyle_activity_score,
        TRAINING_SCORE=analysis.training_intensity_score,
        ADHERENCE_SCORE=analysis.adherence_score,
        RISK_FACTORS=_join(analysis.risk_factors),
        SUCCESS_FACTORS=_join(analysis.success_factors),
        ROUTINE=profile.lifestyle.daily_routine_description,
        TRAINING_DESCRIPTION=profile.training.training_description,
        SLEEP_HOURS=profile.health.sleep_hours_per_night,
        SLEEP_QUALITY=profile.health.sleep_quality or "unknown",
        STRESS=profile.health.stress_level or "unknown",
        ADHERENCE_RISKS=_join(profile.behavioral.adherence_risks),
    )


def mini_plan_prompt(profile: UserProfile, analysis: Optional[AIAnalysis]) -> str:
    """Fill the mini-plan prompt."""
    adherence = analysis.adherence_score if analysis is not None else "unknown"
    risks = analysis.risk_factors if analysis is not None else ()
    return MINI_PLAN_TEMPLATE.safe_substitute(
        GOAL=profile.goal,
        WEIGHT=profile.weight_kg,
        TRAINING_TYPES=_join(profile.training.training_types),
        FREQUENCY=profile.training.training_frequency_per_week,
        EXPERIENCE=profile.training.training_experience_years,
        ADHERENCE_SCORE=adherence,
        RISK_FACTORS=_join(risks),
        JOB_TYPE=profile.lifestyle.job_type or "unknown",
        SLEEP_HOURS=profile.health.sleep_hours_per_night,
        MEAL_FREQUENCY=profile.behavioral.meal_frequency or "unknown",
        COOKING_ABILITY=profile.behavioral.cooking_ability or "unknown",
    )
