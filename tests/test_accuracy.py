"""Tests for the accuracy validator."""

from __future__ import annotations

import dataclasses

import pytest

from tdeecoach.calculator import calculate
from tdeecoach.profiles.models import BMRMethod, CalculationResponse, Coaching, MacroTargets
from tdeecoach.validation.accuracy import (
    INVALID_METHOD_SCORE,
    TDEE_OUT_OF_RANGE_SCORE,
    validate_bmr,
    validate_macros,
    validate_tdee,
    validate_tdee_accuracy,
)


def _targets(**overrides) -> dict[str, MacroTargets]:
    targets = {
        "maintenance": MacroTargets(2200, 160, 61, 275, 29, 25, 50),
        "fat_loss": MacroTargets(1760, 176, 49, 176, 40, 25, 40),
        "muscle_gain": MacroTargets(2464, 176, 68, 308, 29, 25, 50),
        "recomposition": MacroTargets(2200, 192, 61, 275, 35, 25, 50),
    }
    targets.update(overrides)
    return targets


@pytest.fixture
def hand_built_response() -> CalculationResponse:
    """A plausible response that did not come from the engine."""
    return CalculationResponse(
        bmr=1800,
        tdee=2200,
        method_used=BMRMethod.MIFFLIN_ST_JEOR,
        targets=_targets(),
        coaching=Coaching(),
        confidence_score=8,
    )


class TestBMRScoring:
    """Tests for validate_bmr."""

    def test_exact_match_scores_ten(self, standard_male) -> None:
        assert validate_bmr(standard_male, 1780, BMRMethod.MIFFLIN_ST_JEOR) == 10

    def test_error_bands(self, standard_male) -> None:
        # expected Mifflin BMR is 1780
        assert validate_bmr(standard_male, 1800, "mifflin_st_jeor") == 9
        assert validate_bmr(standard_male, 1780 * 1.12, "mifflin_st_jeor") == 6
        assert validate_bmr(standard_male, 1780 * 3, "mifflin_st_jeor") == 1

    def test_katch_without_body_fat_is_invalid(self, standard_male) -> None:
        assert validate_bmr(standard_male, 1996, BMRMethod.KATCH_MCARDLE) == INVALID_METHOD_SCORE

    def test_unknown_method_is_invalid(self, standard_male) -> None:
        assert validate_bmr(standard_male, 1996, "harris_benedict") == INVALID_METHOD_SCORE


class TestTDEEScoring:
    """Tests for validate_tdee."""

    def test_outside_factor_range(self, standard_male) -> None:
        assert validate_tdee(standard_male, 1000, 1000) == TDEE_OUT_OF_RANGE_SCORE
        assert validate_tdee(standard_male, 2300, 1000) == TDEE_OUT_OF_RANGE_SCORE

    def test_close_to_expectation(self, standard_male) -> None:
        # expected factor: sedentary 1.2 + 3 sessions * 0.05
        assert validate_tdee(standard_male, 1350, 1000) == 10
        assert validate_tdee(standard_male, 1200, 1000) == 8


class TestMacroScoring:
    """Tests for validate_macros."""

    def test_average_over_present_goals(self, standard_male) -> None:
        assert validate_macros(standard_male, _targets()) == pytest.approx(9.75)

    def test_no_goals_scores_zero(self, standard_male) -> None:
        assert validate_macros(standard_male, {}) == 0


class TestValidateTDEEAccuracy:
    """Tests for the full audit."""

    def test_hand_built_response(self, standard_male, hand_built_response) -> None:
        result = validate_tdee_accuracy(standard_male, hand_built_response)

        assert result.bmr_accuracy == 9
        assert result.tdee_accuracy == 9
        assert result.macro_accuracy == pytest.approx(9.75)
        assert result.overall_score == pytest.approx(9.25)
        assert result.warnings == []
        assert "Enable AI mode for more personalized recommendations" in result.recommendations

    def test_engine_output_validates_well(self, standard_male) -> None:
        result = validate_tdee_accuracy(standard_male, calculate(standard_male))
        assert result.bmr_accuracy >= 9
        assert result.tdee_accuracy >= 9
        assert result.overall_score >= 7

    def test_low_calorie_and_medical_warnings(self, low_weight_female) -> None:
        response = calculate(low_weight_female)
        assert response.targets["fat_loss"].calories < 1200

        result = validate_tdee_accuracy(low_weight_female, response)
        assert result.warnings == [
            "Fat loss calories are very low - may not be sustainable",
            "Medical conditions present - consult healthcare provider",
        ]

    def test_age_and_confidence_warnings(self, standard_male, hand_built_response) -> None:
        older = dataclasses.replace(standard_male, age=70)
        response = dataclasses.replace(hand_built_response, confidence_score=5)

        warnings = validate_tdee_accuracy(older, response).warnings
        assert warnings == [
            "Low confidence score - consider providing more detailed information",
            "Consider consulting healthcare provider due to age",
        ]

    def test_negative_carb_warning_is_last(self, standard_male, hand_built_response) -> None:
        targets = _targets(maintenance=MacroTargets(2200, 250, 61, -30, 45, 25, -5))
        response = dataclasses.replace(hand_built_response, targets=targets)

        warnings = validate_tdee_accuracy(standard_male, response).warnings
        assert warnings[0] == "Protein target is very high - ensure adequate hydration and fiber"
        assert "carbohydrate target is negative" in warnings[-1]

    def test_recommendations_for_detailed_profile(self, standard_male) -> None:
        detailed = "x" * 60
        profile = dataclasses.replace(
            standard_male,
            body_fat_percent=15,
            lifestyle=dataclasses.replace(
                standard_male.lifestyle, daily_routine_description=detailed
            ),
            training=dataclasses.replace(
                standard_male.training, training_description=detailed
            ),
        )
        result = validate_tdee_accuracy(profile, calculate(profile))
        assert result.recommendations == [
            "Enable AI mode for more personalized recommendations"
        ]
