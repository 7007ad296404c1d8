"""Tests for profile analysis and its fallback scorers."""

from __future__ import annotations

import dataclasses

import pytest

from tdeecoach.analysis import ActivityAssessor, RoutineAnalysis, TrainingAnalysis
from tdeecoach.analysis.assessor import (
    assess_adherence_score,
    assess_lifestyle_score,
    assess_training_score,
    fallback_analysis,
)
from tdeecoach.errors import ProviderError
from tdeecoach.llm import prompts


class TestFallbackScores:
    """Tests for the deterministic 1-10 scorers."""

    def test_standard_male_scores(self, standard_male) -> None:
        # (5 + desk 3) / 2 + light household 1
        assert assess_lifestyle_score(standard_male.lifestyle) == 5
        # ((5 + 3 * 0.5) + moderate 5) / 2 = 5.75
        assert assess_training_score(standard_male.training) == 6
        # (7 + high 8) / 2 + moderate support 2, clamped
        assert assess_adherence_score(standard_male.behavioral) == 10

    def test_low_adherence(self, low_weight_female) -> None:
        # (7 + low 4) / 2 - 3 risks * 0.5 + no support 0 = 4
        assert assess_adherence_score(low_weight_female.behavioral) == 4

    def test_physical_job_half_point_rounds_up(self, standard_male) -> None:
        # (5 + physical 8) / 2 = 6.5
        lifestyle = dataclasses.replace(
            standard_male.lifestyle, job_type="physical_job", household_activity_level="minimal"
        )
        assert assess_lifestyle_score(lifestyle) == 7

    def test_scores_are_bounded(self, low_weight_female) -> None:
        assert 1 <= assess_lifestyle_score(low_weight_female.lifestyle) <= 10
        assert 1 <= assess_training_score(low_weight_female.training) <= 10

    def test_fallback_analysis(self, standard_male) -> None:
        analysis = fallback_analysis(standard_male)
        assert analysis.activity_factor_adjustment == 0.0
        assert analysis.estimated_neat == 300
        assert analysis.training_volume_score == analysis.training_intensity_score
        assert analysis.estimated_metabolic_rate == pytest.approx(1780)
        assert analysis.risk_factors == ()


class TestActivityAssessor:
    """Tests for ActivityAssessor with and without a provider."""

    def test_no_client_uses_fallback(self, standard_male) -> None:
        assert ActivityAssessor().analyze(standard_male) == fallback_analysis(standard_male)

    def test_provider_analysis_is_bounded(self, standard_male, fake_client) -> None:
        client = fake_client([{"activity_factor_adjustment": 0.9, "adherence_score": 42}])
        analysis = ActivityAssessor(client).analyze(standard_male)

        assert analysis.activity_factor_adjustment == 0.2
        assert analysis.adherence_score == 10
        system, prompt = client.calls[0]
        assert system == prompts.PROFILE_SYSTEM
        assert "Weight: 80.0kg" in prompt

    def test_provider_failure_falls_back(self, standard_male, failing_client) -> None:
        analysis = ActivityAssessor(failing_client).analyze(standard_male)
        assert analysis == fallback_analysis(standard_male)

    @pytest.mark.parametrize(
        "reply",
        [
            {"risk_factors": 5},
            {"success_factors": {"nested": "object"}},
            {"key_focus_areas": 3.5, "adherence_score": 9},
        ],
    )
    def test_malformed_reply_falls_back(self, standard_male, fake_client, reply) -> None:
        analysis = ActivityAssessor(fake_client([reply])).analyze(standard_male)
        assert analysis == fallback_analysis(standard_male)

    def test_routine_analysis(self, fake_client) -> None:
        client = fake_client(
            [
                {
                    "activity_score": 14,
                    "neat_estimate": 450,
                    "job_activity_level": "active",
                    "lifestyle_insights": ["Walks a lot"],
                }
            ]
        )
        result = ActivityAssessor(client).analyze_daily_routine("Mail carrier")
        assert result.activity_score == 10
        assert result.neat_estimate == 450
        assert result.lifestyle_insights == ("Walks a lot",)

    def test_routine_analysis_fallback(self, failing_client) -> None:
        assert ActivityAssessor(failing_client).analyze_daily_routine("x") == RoutineAnalysis()
        assert ActivityAssessor().analyze_daily_routine("x") == RoutineAnalysis()

    def test_training_analysis_filters_unknown_types(self, fake_client) -> None:
        client = fake_client([{"training_types": ["running", "quidditch"], "intensity_score": 7}])
        result = ActivityAssessor(client).analyze_training_description("Runs daily")
        assert result.training_types == ("running",)
        assert result.intensity_score == 7

    def test_training_analysis_fallback(self, fake_client) -> None:
        client = fake_client([ProviderError("timeout")])
        result = ActivityAssessor(client).analyze_training_description("Lifts")
        assert result == TrainingAnalysis()
        assert result.training_insights == ("Unable to analyze training description",)
