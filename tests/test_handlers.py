"""Tests for request validation and handlers."""

from __future__ import annotations

from tdeecoach.analysis import fallback_analysis
from tdeecoach.api import (
    handle_calculation_request,
    handle_coaching_request,
    handle_lifestyle_analysis_request,
    validate_profile_payload,
)
from tdeecoach.calculator import calculate_all_targets


class TestValidateProfilePayload:
    """Tests for validate_profile_payload."""

    def test_valid(self, standard_male_data, low_weight_female_data) -> None:
        assert validate_profile_payload(standard_male_data) == []
        # height/weight aliases
        assert validate_profile_payload(low_weight_female_data) == []

    def test_everything_wrong(self) -> None:
        errors = validate_profile_payload(
            {
                "name": "  ",
                "email": "not-an-email",
                "age": 12,
                "gender": "unknown",
                "height_cm": 90,
                "weight_kg": 400,
                "goal": "bulk",
                "body_fat_percent": 60,
            }
        )
        assert errors == [
            "Name is required",
            "Valid email is required",
            "Age must be between 16 and 100",
            "Gender must be male, female, or other",
            "Height must be between 100 and 250 cm",
            "Weight must be between 30 and 300 kg",
            "Goal must be fat_loss, muscle_gain, maintenance, recomposition, or performance",
            "Body fat percentage must be between 3 and 50",
        ]

    def test_zero_body_fat_means_unmeasured(self, standard_male_data) -> None:
        standard_male_data["body_fat_percent"] = 0
        assert validate_profile_payload(standard_male_data) == []

    def test_non_numeric_age(self, standard_male_data) -> None:
        standard_male_data["age"] = "thirty"
        assert validate_profile_payload(standard_male_data) == ["Age must be between 16 and 100"]

    def test_missing_profile(self) -> None:
        assert validate_profile_payload(None) == ["Profile is required"]


class TestCalculationHandler:
    """Tests for handle_calculation_request."""

    def test_success(self, standard_male_data) -> None:
        response = handle_calculation_request({"profile": standard_male_data})

        assert response.status_code == 200
        assert response.body["bmr"] == 1996
        assert response.body["tdee"] == 2695
        assert "ai_enhancements" not in response.body

    def test_invalid_profile(self, standard_male_data) -> None:
        standard_male_data["email"] = "nope"
        response = handle_calculation_request({"profile": standard_male_data})

        assert response.status_code == 400
        assert response.body == {
            "error": "Invalid profile data",
            "details": ["Valid email is required"],
        }

    def test_unparseable_nested_number(self, standard_male_data) -> None:
        standard_male_data["training"]["training_frequency_per_week"] = "often"
        response = handle_calculation_request({"profile": standard_male_data})
        assert response.status_code == 400

    def test_ai_mode_without_client(self, standard_male_data) -> None:
        response = handle_calculation_request({"profile": standard_male_data, "ai_mode": True})

        assert response.status_code == 200
        assert response.body["ai_enhancements"]["activity_factor_adjustment"] == 0.0
        assert response.body["confidence_score"] == 8.0
        assert "mini_plan" in response.body["coaching"]
        assert "ai_coach_note" not in response.body["coaching"]

    def test_ai_mode_with_failing_provider(self, standard_male_data, failing_client) -> None:
        response = handle_calculation_request(
            {"profile": standard_male_data, "ai_mode": True, "include_mini_plan": False},
            client=failing_client,
        )

        assert response.status_code == 200
        assert "mini_plan" not in response.body["coaching"]
        assert response.body["coaching"]["ai_coach_note"].startswith("Hi Test Male!")

    def test_ai_mode_with_malformed_analysis(self, standard_male_data, fake_client) -> None:
        client = fake_client([{"risk_factors": 5}, "Keep it up!", {"weekly_sessions": 3}])
        response = handle_calculation_request(
            {"profile": standard_male_data, "ai_mode": True}, client=client
        )

        assert response.status_code == 200
        enhancements = response.body["ai_enhancements"]
        assert enhancements["activity_factor_adjustment"] == 0.0
        assert response.body["coaching"]["ai_coach_note"] == "Keep it up!"

    def test_malformed_profile_section(self, standard_male_data) -> None:
        standard_male_data["health"]["medical_conditions"] = 5
        response = handle_calculation_request({"profile": standard_male_data})
        assert response.status_code == 400

    def test_unexpected_failure_is_500(self, standard_male_data) -> None:
        class BrokenClient:
            def complete_json(self, *args, **kwargs):
                raise RuntimeError("boom")

        response = handle_calculation_request(
            {"profile": standard_male_data, "ai_mode": True}, client=BrokenClient()
        )
        assert response.status_code == 500
        assert response.body == {"error": "Internal server error", "message": "boom"}


class TestLifestyleAnalysisHandler:
    """Tests for handle_lifestyle_analysis_request."""

    def test_requires_a_description(self) -> None:
        response = handle_lifestyle_analysis_request({})
        assert response.status_code == 400
        assert response.body["error"] == "Either daily_routine or training_description is required"

    def test_fallback_results(self) -> None:
        response = handle_lifestyle_analysis_request({"daily_routine": "Desk job"})

        assert response.status_code == 200
        assert response.body["success"] is True
        results = response.body["results"]
        assert results["lifestyle_analysis"]["activity_score"] == 5
        assert "training_analysis" not in results

    def test_provider_results(self, fake_client) -> None:
        client = fake_client([{"training_types": ["cycling"], "volume_score": 8}])
        response = handle_lifestyle_analysis_request(
            {"training_description": "Commutes by bike"}, client=client
        )
        analysis = response.body["results"]["training_analysis"]
        assert analysis["training_types"] == ["cycling"]
        assert analysis["volume_score"] == 8


class TestCoachingHandler:
    """Tests for handle_coaching_request."""

    def _payload(self, profile_data, profile, **extra):
        return {
            "profile": profile_data,
            "analysis": fallback_analysis(profile).to_dict(),
            "tdee": 2695,
            "targets": {
                goal: t.to_dict() for goal, t in calculate_all_targets(2695, profile).items()
            },
            **extra,
        }

    def test_requires_all_fields(self) -> None:
        response = handle_coaching_request({"profile": {"name": "x"}})
        assert response.status_code == 400
        assert response.body["error"] == "Profile, analysis, tdee, and targets are required"

    def test_full(self, standard_male_data, standard_male) -> None:
        response = handle_coaching_request(self._payload(standard_male_data, standard_male))

        assert response.status_code == 200
        results = response.body["results"]
        assert set(results) == {"coaching_note", "mini_plan", "risk_flags", "success_strategies"}
        assert results["coaching_note"].startswith("Hi Test Male!")

    def test_single_type(self, standard_male_data, standard_male) -> None:
        payload = self._payload(standard_male_data, standard_male, coaching_type="risks")
        response = handle_coaching_request(payload)
        assert list(response.body["results"]) == ["risk_flags"]

    def test_unknown_type(self, standard_male_data, standard_male) -> None:
        payload = self._payload(standard_male_data, standard_male, coaching_type="everything")
        assert handle_coaching_request(payload).status_code == 400

    def test_malformed_targets(self, standard_male_data, standard_male) -> None:
        payload = self._payload(standard_male_data, standard_male)
        payload["targets"] = {"maintenance": {"calories": 2000}}
        assert handle_coaching_request(payload).status_code == 400
