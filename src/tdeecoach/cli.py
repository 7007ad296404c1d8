"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from tdeecoach.config import get_settings, reload_settings
from tdeecoach.config.settings import Settings

app = typer.Typer(
    help="TDEE, BMR and macro calculator with accuracy validation",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Manage configuration")
app.add_typer(config_app, name="config")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def load_profile_file(profile_file: Path, json_output: bool = False):
    """Load and validate a YAML or JSON profile file.

    Raises typer.Exit(1) with the validation errors if the file is missing
    or the profile is invalid.
    """
    from tdeecoach.api.validators import validate_profile_payload
    from tdeecoach.errors import InvalidProfileError
    from tdeecoach.profiles.models import UserProfile

    errors: list[str] = []
    data: Any = None

    if not profile_file.exists():
        errors = [f"Profile file not found: {profile_file}"]
    else:
        try:
            with open(profile_file) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            errors = [f"Could not parse {profile_file}: {e}"]

    if not errors:
        errors = validate_profile_payload(data)

    profile = None
    if not errors:
        try:
            profile = UserProfile.from_dict(data)
        except InvalidProfileError as e:
            errors = [str(e)]

    if errors:
        if json_output:
            output_json({"error": "Invalid profile data", "details": errors})
        else:
            console.print("[red]Invalid profile data:[/red]")
            for error in errors:
                console.print(f"  [red]- {error}[/red]")
        raise typer.Exit(1)

    return profile


def _output_format(json_output: bool, settings: Settings) -> str:
    return "json" if json_output else settings.defaults.output_format


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (default: ~/.tdeecoach/config.yaml)"
    ),
) -> None:
    """Configure logging and settings before any command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    if config is not None:
        reload_settings(config)


# ============================================================================
# Calculation commands
# ============================================================================


@app.command()
def calculate(
    profile_file: Path = typer.Argument(..., help="YAML or JSON profile file"),
    ai: bool = typer.Option(False, "--ai", help="Use AI analysis when a provider is configured"),
    coaching: Optional[bool] = typer.Option(
        None, "--coaching/--no-coaching", help="Include coaching output (default from config)"
    ),
    mini_plan: Optional[bool] = typer.Option(
        None, "--mini-plan/--no-mini-plan", help="Include a mini-plan (default from config)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Calculate BMR, TDEE and macro targets for a profile."""
    from tdeecoach.analysis import ActivityAssessor
    from tdeecoach.calculator import calculate as run_calculation
    from tdeecoach.coaching import CoachingSystem
    from tdeecoach.export.formatters import format_calculation
    from tdeecoach.llm import build_chat_client

    settings = get_settings()
    profile = load_profile_file(profile_file, json_output)

    client = build_chat_client(settings) if ai else None
    if ai and client is None and not json_output:
        console.print("[dim]No AI provider configured; using rule-based analysis[/dim]")

    analysis = ActivityAssessor(client).analyze(profile) if ai else None

    response = run_calculation(
        profile,
        analysis,
        include_coaching=settings.defaults.include_coaching if coaching is None else coaching,
        include_mini_plan=settings.defaults.include_mini_plan if mini_plan is None else mini_plan,
        coaching=CoachingSystem(client),
    )

    output = format_calculation(
        response,
        _output_format(json_output, settings),
        profile_name=profile.name,
        console=console,
    )
    if output:
        print(output)


@app.command()
def validate(
    profile_file: Path = typer.Argument(..., help="YAML or JSON profile file"),
    response_file: Optional[Path] = typer.Option(
        None, "--response", "-r", help="Audit a saved JSON response instead of recalculating"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Calculate targets for a profile and audit their accuracy."""
    from tdeecoach.calculator import calculate as run_calculation
    from tdeecoach.export.formatters import format_validation
    from tdeecoach.profiles.models import CalculationResponse
    from tdeecoach.validation import validate_tdee_accuracy

    settings = get_settings()
    profile = load_profile_file(profile_file, json_output)

    if response_file is not None:
        try:
            with open(response_file) as f:
                response = CalculationResponse.from_dict(json.load(f))
        except (OSError, KeyError, TypeError, ValueError) as e:
            console.print(f"[red]Could not load response {response_file}: {e}[/red]")
            raise typer.Exit(1)
    else:
        response = run_calculation(profile, include_coaching=False)

    result = validate_tdee_accuracy(profile, response)

    output = format_validation(result, _output_format(json_output, settings), console=console)
    if output:
        print(output)


@app.command()
def suite(
    threshold: Optional[float] = typer.Option(
        None, "--threshold", "-t", help="Passing overall score (default from config)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Run the validation battery over the reference profiles.

    Exits with status 1 when any case fails.
    """
    from tdeecoach.export.formatters import format_suite
    from tdeecoach.validation import run_validation_suite

    settings = get_settings()
    pass_threshold = settings.validation.pass_threshold if threshold is None else threshold

    summary = run_validation_suite(pass_threshold=pass_threshold)

    output = format_suite(summary, _output_format(json_output, settings), console=console)
    if output:
        print(output)

    if summary.failed_tests:
        raise typer.Exit(1)


@app.command()
def analyze(
    profile_file: Path = typer.Argument(..., help="YAML or JSON profile file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Score lifestyle, training and adherence for a profile."""
    from tdeecoach.analysis import ActivityAssessor
    from tdeecoach.llm import build_chat_client

    settings = get_settings()
    profile = load_profile_file(profile_file, json_output)
    analysis = ActivityAssessor(build_chat_client(settings)).analyze(profile)

    if _output_format(json_output, settings) == "json":
        output_json(analysis.to_dict())
        return

    table = Table(title=f"Profile Analysis: {profile.name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Lifestyle activity", f"{analysis.lifestyle_activity_score:g}/10")
    table.add_row("Training intensity", f"{analysis.training_intensity_score:g}/10")
    table.add_row("Training volume", f"{analysis.training_volume_score:g}/10")
    table.add_row("Adherence", f"{analysis.adherence_score:g}/10")
    table.add_row("Estimated NEAT", f"{analysis.estimated_neat:.0f} kcal")
    table.add_row("Activity adjustment", f"{analysis.activity_factor_adjustment:+.2f}")
    table.add_row("Recovery needs", analysis.recovery_needs)
    table.add_row("Approach", analysis.recommended_approach)
    table.add_row("Focus areas", "\n".join(analysis.key_focus_areas))
    if analysis.risk_factors:
        table.add_row("Risk factors", "\n".join(analysis.risk_factors))
    console.print(table)


# ============================================================================
# Config commands
# ============================================================================


@config_app.command("show")
def config_show() -> None:
    """Show the active configuration."""
    settings = get_settings()
    console.print(yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write config.yaml"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a default config file."""
    settings = Settings()
    target = path or Path.home() / ".tdeecoach" / "config.yaml"
    if target.exists() and not force:
        console.print(f"[yellow]Config already exists: {target}[/yellow] (use --force)")
        raise typer.Exit(1)

    written = settings.save(target)
    console.print(f"[green]Wrote config to {written}[/green]")


if __name__ == "__main__":
    app()
