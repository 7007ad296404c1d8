"""Request handlers for calculation, lifestyle analysis and coaching.

Handlers take a decoded JSON body and return an ApiResponse; mounting them
behind an HTTP framework is left to the caller. The AI client is injected
per call; without one every AI path degrades to its rule-based fallback.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from tdeecoach.analysis.assessor import ActivityAssessor
from tdeecoach.api.response import (
    ApiResponse,
    error_response,
    internal_error_response,
    results_response,
    success_response,
)
from tdeecoach.api.validators import validate_profile_payload
from tdeecoach.calculator.engine import calculate
from tdeecoach.coaching.coach import (
    CoachingSystem,
    generate_risk_flags,
    generate_success_strategies,
)
from tdeecoach.errors import InvalidProfileError
from tdeecoach.llm.client import ChatClient
from tdeecoach.profiles.models import AIAnalysis, MacroTargets, UserProfile

logger = logging.getLogger(__name__)

COACHING_TYPES = ("full", "note", "mini_plan", "risks", "strategies")


def _payload(payload: Any) -> dict[str, Any]:
    return payload if isinstance(payload, dict) else {}


def handle_calculation_request(
    payload: Any,
    client: Optional[ChatClient] = None,
) -> ApiResponse:
    """Validate a profile and return its full calculation response.

    Payload keys: ``profile`` (required), ``ai_mode`` (default False),
    ``include_coaching`` (default True), ``include_mini_plan`` (default True).
    """
    try:
        data = _payload(payload)
        profile_data = data.get("profile")

        errors = validate_profile_payload(profile_data)
        if errors:
            return error_response("Invalid profile data", errors)

        try:
            profile = UserProfile.from_dict(profile_data)
        except InvalidProfileError as e:
            return error_response("Invalid profile data", [str(e)])

        analysis = None
        if data.get("ai_mode", False):
            analysis = ActivityAssessor(client).analyze(profile)

        response = calculate(
            profile,
            analysis,
            include_coaching=bool(data.get("include_coaching", True)),
            include_mini_plan=bool(data.get("include_mini_plan", True)),
            coaching=CoachingSystem(client),
        )
        return success_response(response.to_dict())
    except Exception as e:
        logger.exception("TDEE calculation failed")
        return internal_error_response(e)


def handle_lifestyle_analysis_request(
    payload: Any,
    client: Optional[ChatClient] = None,
) -> ApiResponse:
    """Analyze free-text routine and/or training descriptions.

    Payload keys: ``daily_routine`` and ``training_description``; at least
    one is required.
    """
    try:
        data = _payload(payload)
        daily_routine = data.get("daily_routine")
        training_description = data.get("training_description")

        if not daily_routine and not training_description:
            return error_response("Either daily_routine or training_description is required")

        assessor = ActivityAssessor(client)
        results: dict[str, Any] = {}
        if daily_routine:
            results["lifestyle_analysis"] = assessor.analyze_daily_routine(
                str(daily_routine)
            ).to_dict()
        if training_description:
            results["training_analysis"] = assessor.analyze_training_description(
                str(training_description)
            ).to_dict()

        return results_response(results)
    except Exception as e:
        logger.exception("Lifestyle analysis failed")
        return internal_error_response(e)


def handle_coaching_request(
    payload: Any,
    client: Optional[ChatClient] = None,
) -> ApiResponse:
    """Generate coaching output for an already calculated profile.

    Payload keys: ``profile``, ``analysis``, ``tdee`` and ``targets``
    (all required) plus ``coaching_type``: one of full, note, mini_plan,
    risks or strategies (default full).
    """
    try:
        data = _payload(payload)
        profile_data = data.get("profile")
        analysis_data = data.get("analysis")
        tdee = data.get("tdee")
        targets_data = data.get("targets")
        coaching_type = data.get("coaching_type", "full")

        if not profile_data or not analysis_data or not tdee or not targets_data:
            return error_response("Profile, analysis, tdee, and targets are required")
        if coaching_type not in COACHING_TYPES:
            return error_response(
                "Invalid coaching_type",
                [f"coaching_type must be one of: {', '.join(COACHING_TYPES)}"],
            )

        try:
            profile = UserProfile.from_dict(profile_data)
            analysis = AIAnalysis.from_dict(analysis_data)
            targets = {
                goal: MacroTargets.from_dict(target) for goal, target in targets_data.items()
            }
            tdee = int(tdee)
        except (InvalidProfileError, AttributeError, KeyError, TypeError, ValueError) as e:
            return error_response("Invalid coaching request", [str(e)])

        coaching = CoachingSystem(client)
        full = coaching_type == "full"
        results: dict[str, Any] = {}

        if full or coaching_type == "note":
            results["coaching_note"] = coaching.coaching_note(profile, analysis, tdee, targets)
        if full or coaching_type == "mini_plan":
            results["mini_plan"] = coaching.mini_plan(profile, analysis).to_dict()
        if full or coaching_type == "risks":
            results["risk_flags"] = generate_risk_flags(profile, analysis)
        if full or coaching_type == "strategies":
            results["success_strategies"] = generate_success_strategies(profile, analysis)

        return results_response(results)
    except Exception as e:
        logger.exception("Coaching generation failed")
        return internal_error_response(e)
