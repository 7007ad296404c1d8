"""Tests for BMR estimation."""

from __future__ import annotations

import dataclasses

import pytest

from tdeecoach.calculator.bmr import (
    calculate_bmr,
    cunningham,
    has_usable_body_fat,
    katch_mcardle,
    mifflin_st_jeor,
)
from tdeecoach.calculator.rounding import round_half_up
from tdeecoach.profiles.models import BMRMethod, TrainingProfile


class TestFormulas:
    """Tests for the individual BMR equations."""

    def test_katch_mcardle(self) -> None:
        # LBM = 80 * 0.8 = 64 kg
        assert katch_mcardle(80, 20) == pytest.approx(370 + 21.6 * 64)

    def test_cunningham_uses_assumed_body_fat(self) -> None:
        assert cunningham(80, is_male=True) == pytest.approx(500 + 22 * 68)
        assert cunningham(80, is_male=False) == pytest.approx(500 + 22 * 60)

    def test_mifflin_male_and_female(self) -> None:
        assert mifflin_st_jeor(80, 180, 30, is_male=True) == pytest.approx(1780)
        assert mifflin_st_jeor(60, 165, 30, is_male=False) == pytest.approx(1320.25)


class TestCalculateBMR:
    """Tests for formula selection."""

    def test_strength_athlete_uses_cunningham(self, standard_male) -> None:
        bmr, method = calculate_bmr(standard_male)
        assert method == BMRMethod.CUNNINGHAM
        assert bmr == 1996

    def test_measured_body_fat_uses_katch_mcardle(self, standard_male) -> None:
        profile = dataclasses.replace(standard_male, body_fat_percent=20)
        bmr, method = calculate_bmr(profile)
        assert method == BMRMethod.KATCH_MCARDLE
        assert bmr == 1752

    def test_body_fat_out_of_range_is_ignored(self, standard_male) -> None:
        for body_fat in (0, 50, 55):
            profile = dataclasses.replace(standard_male, body_fat_percent=body_fat)
            assert not has_usable_body_fat(profile)
            assert calculate_bmr(profile)[1] == BMRMethod.CUNNINGHAM

    def test_experienced_non_strength_trainee_uses_cunningham(self, standard_male) -> None:
        training = TrainingProfile(training_types=("running",), training_experience_years=4)
        profile = dataclasses.replace(standard_male, training=training)
        assert calculate_bmr(profile)[1] == BMRMethod.CUNNINGHAM

    def test_default_is_mifflin(self, low_weight_female) -> None:
        bmr, method = calculate_bmr(low_weight_female)
        assert method == BMRMethod.MIFFLIN_ST_JEOR
        assert bmr == 1245

    def test_other_gender_uses_female_constant(self, low_weight_female) -> None:
        profile = dataclasses.replace(low_weight_female, gender="other")
        assert calculate_bmr(profile)[0] == 1245

    def test_half_calorie_rounds_up(self, low_weight_female) -> None:
        # 800 + 6.25 * 174 - 150 + 5 = 1742.5
        profile = dataclasses.replace(
            low_weight_female, gender="male", weight_kg=80, height_cm=174, age=30
        )
        assert calculate_bmr(profile) == (1743, BMRMethod.MIFFLIN_ST_JEOR)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1), (1.5, 2), (2.5, 3), (6.5, 7), (1742.5, 1743), (48.5, 49), (2.49, 2), (-0.5, 0)],
    )
    def test_ties_go_up(self, value, expected) -> None:
        assert round_half_up(value) == expected
