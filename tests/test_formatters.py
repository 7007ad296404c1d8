"""Tests for output formatters."""

from __future__ import annotations

import io
import json

import pytest
from rich.console import Console

from tdeecoach.analysis import fallback_analysis
from tdeecoach.calculator import calculate
from tdeecoach.export import format_calculation, format_suite, format_validation
from tdeecoach.validation import run_validation_suite, validate_tdee_accuracy


def _console() -> Console:
    return Console(file=io.StringIO(), width=120)


class TestFormatters:
    """Tests for table and JSON output."""

    def test_calculation_table(self, standard_male) -> None:
        console = _console()
        response = calculate(standard_male, fallback_analysis(standard_male))

        assert format_calculation(response, "table", "Test Male", console) is None

        text = console.file.getvalue()
        assert "Daily Targets" in text
        assert "Mini-Plan" in text
        assert "higher_protein_strength_training" in text

    def test_calculation_json(self, standard_male) -> None:
        output = format_calculation(calculate(standard_male), "json")
        assert json.loads(output)["tdee"] == 2695

    def test_validation_outputs(self, low_weight_female) -> None:
        result = validate_tdee_accuracy(low_weight_female, calculate(low_weight_female))
        console = _console()

        format_validation(result, "table", console)
        assert "Fat loss calories are very low" in console.file.getvalue()
        assert json.loads(format_validation(result, "json"))["warnings"] == result.warnings

    def test_suite_table(self) -> None:
        console = _console()
        format_suite(run_validation_suite(), "table", console)
        assert "Passed 6/6" in console.file.getvalue()

    def test_unknown_format(self, standard_male) -> None:
        with pytest.raises(ValueError):
            format_calculation(calculate(standard_male), "markdown")
