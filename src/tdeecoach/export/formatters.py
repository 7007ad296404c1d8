"""Output formatters for calculation and validation results."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tdeecoach.profiles.models import CalculationResponse
from tdeecoach.validation.accuracy import ValidationResult
from tdeecoach.validation.suite import ValidationSuite


def _score_color(score: float) -> str:
    if score >= 8:
        return "green"
    if score >= 6:
        return "yellow"
    return "red"


class TableFormatter:
    """Format results as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format_calculation(
        self,
        response: CalculationResponse,
        profile_name: Optional[str] = None,
    ) -> None:
        """Print a calculation response."""
        header_lines = [
            f"[bold]TDEE CALCULATION[/bold] - {datetime.now().strftime('%Y-%m-%d %H:%M')}",
        ]
        if profile_name:
            header_lines.append(f"Profile: {profile_name}")
        header_lines.append(
            f"BMR: [bold]{response.bmr}[/bold] kcal ({response.method_used.value})"
        )
        header_lines.append(f"TDEE: [bold]{response.tdee}[/bold] kcal")
        color = _score_color(response.confidence_score)
        header_lines.append(f"Confidence: [{color}]{response.confidence_score:.1f}/10[/{color}]")

        self.console.print(Panel("\n".join(header_lines), title="tdeecoach"))

        targets_table = Table(title="Daily Targets")
        targets_table.add_column("Goal", style="cyan")
        targets_table.add_column("Calories", justify="right")
        targets_table.add_column("Protein", justify="right")
        targets_table.add_column("Fat", justify="right")
        targets_table.add_column("Carbs", justify="right")

        for goal, target in response.targets.items():
            carbs = f"{target.carb_g}g ({target.carb_percent}%)"
            if target.carb_g < 0:
                carbs = f"[red]{carbs}[/red]"
            targets_table.add_row(
                goal.replace("_", " ").title(),
                str(target.calories),
                f"{target.protein_g}g ({target.protein_percent}%)",
                f"{target.fat_g}g ({target.fat_percent}%)",
                carbs,
            )

        self.console.print(targets_table)

        enhancements = response.ai_enhancements
        if enhancements is not None:
            timing = enhancements.timing_recommendations
            self.console.print(
                Panel(
                    "\n".join(
                        [
                            f"Macro profile: {enhancements.macro_profile_hint}",
                            f"Activity adjustment: {enhancements.activity_factor_adjustment:+.2f}",
                            f"Pre-workout: {timing.pre_workout}",
                            f"Post-workout: {timing.post_workout}",
                            f"Meal timing: {timing.meal_timing}",
                            f"Hydration: {timing.hydration}",
                            f"Sleep: {timing.sleep_optimization}",
                        ]
                    ),
                    title="Enhancements",
                )
            )

        coaching = response.coaching
        if coaching.coach_note:
            self.console.print(Panel(coaching.ai_coach_note or coaching.coach_note, title="Coach"))
        for flag in coaching.risk_flags:
            self.console.print(f"[yellow]! {flag}[/yellow]")
        for strategy in coaching.success_strategies:
            self.console.print(f"[green]+ {strategy}[/green]")

        plan = coaching.mini_plan
        if plan is not None:
            plan_table = Table(title="Mini-Plan", show_header=False)
            plan_table.add_column("Item", style="cyan")
            plan_table.add_column("Value")
            plan_table.add_row("Sessions/week", str(plan.weekly_sessions))
            plan_table.add_row("Template", plan.training_template)
            plan_table.add_row("Steps", plan.step_target)
            plan_table.add_row("Protein minimum", f"{plan.protein_minimum_g}g")
            plan_table.add_row("Habits", "\n".join(plan.habits))
            plan_table.add_row("Focus", plan.weekly_focus)
            self.console.print(plan_table)

    def format_validation(self, result: ValidationResult) -> None:
        """Print one validation result."""
        table = Table(title="Accuracy Validation")
        table.add_column("Check")
        table.add_column("Score", justify="right")

        for label, score in (
            ("BMR", result.bmr_accuracy),
            ("TDEE", result.tdee_accuracy),
            ("Macros", result.macro_accuracy),
            ("Overall", result.overall_score),
        ):
            color = _score_color(score)
            table.add_row(label, f"[{color}]{score:.1f}[/{color}]")

        self.console.print(table)

        for warning in result.warnings:
            self.console.print(f"[yellow]Warning: {warning}[/yellow]")
        for recommendation in result.recommendations:
            self.console.print(f"[dim]- {recommendation}[/dim]")

    def format_suite(self, suite: ValidationSuite) -> None:
        """Print a validation battery summary."""
        table = Table(title="Validation Suite")
        table.add_column("Case", style="cyan")
        table.add_column("BMR", justify="right")
        table.add_column("TDEE", justify="right")
        table.add_column("Macros", justify="right")
        table.add_column("Overall", justify="right")
        table.add_column("Status", justify="center")

        for case in suite.results:
            result = case.result
            status = "[green]PASS[/green]" if case.passed else "[red]FAIL[/red]"
            table.add_row(
                case.name,
                f"{result.bmr_accuracy:.1f}",
                f"{result.tdee_accuracy:.1f}",
                f"{result.macro_accuracy:.1f}",
                f"{result.overall_score:.2f}",
                status,
            )

        self.console.print(table)
        self.console.print(
            f"Passed {suite.passed_tests}/{suite.total_tests} | "
            f"Average score {suite.average_score:.2f}"
        )


class JSONFormatter:
    """Format results as JSON for programmatic use."""

    def format_calculation(self, response: CalculationResponse) -> str:
        return json.dumps(response.to_dict(), indent=2)

    def format_validation(self, result: ValidationResult) -> str:
        return json.dumps(result.to_dict(), indent=2)

    def format_suite(self, suite: ValidationSuite) -> str:
        return json.dumps(suite.to_dict(), indent=2)


def format_calculation(
    response: CalculationResponse,
    output_format: str = "table",
    profile_name: Optional[str] = None,
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a calculation response in the specified format.

    Args:
        response: Calculation response to format
        output_format: One of 'table', 'json'
        profile_name: Optional profile name (table only)
        console: Rich console (for table format)

    Returns:
        Formatted string for json, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format_calculation(response, profile_name)
        return None
    elif output_format == "json":
        return JSONFormatter().format_calculation(response)
    else:
        raise ValueError(f"Unknown output format: {output_format}")


def format_validation(
    result: ValidationResult,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a validation result; see format_calculation."""
    if output_format == "table":
        TableFormatter(console).format_validation(result)
        return None
    elif output_format == "json":
        return JSONFormatter().format_validation(result)
    else:
        raise ValueError(f"Unknown output format: {output_format}")


def format_suite(
    suite: ValidationSuite,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a validation battery summary; see format_calculation."""
    if output_format == "table":
        TableFormatter(console).format_suite(suite)
        return None
    elif output_format == "json":
        return JSONFormatter().format_suite(suite)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
