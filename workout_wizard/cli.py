"""
Command-line inspection tool for the workout wizard engine.

Reads a JSON object of raw field values and reports:
- Step validation (errors, warnings, suggestions)
- Formatted selections and completion percentages
- The declared step table
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from workout_wizard import messages as msg
from workout_wizard.engine import WorkoutFormEngine
from workout_wizard.logger import setup_logger
from workout_wizard.schemas import ValidationResult
from workout_wizard.settings import WizardSettings

app = typer.Typer(
    help="Workout Wizard - inspect validation, completion and formatting for form values"
)
console = Console()


# ===== HELPERS =====


def _build_engine() -> WorkoutFormEngine:
    settings = WizardSettings()
    setup_logger(level=settings.log_level, log_file=settings.log_file)
    return WorkoutFormEngine(settings=settings)


def _load_values(path: Path) -> Dict[str, Any]:
    """
    Load raw field values from a JSON file.

    Raises:
        typer.Exit: If the file is not a JSON object
    """
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]✗ Failed to load values: {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(data, dict):
        console.print("[red]✗ Values file must contain a JSON object[/red]")
        raise typer.Exit(1)

    return data


def _display_step_result(step_name: str, label: str, result: ValidationResult) -> None:
    status = "[green]VALID[/green]" if result.is_valid else "[red]INVALID[/red]"
    console.print(f"\n[bold]{label}[/bold] ({step_name}): {status}")

    if result.errors or result.warnings:
        table = Table(box=box.ROUNDED)
        table.add_column("Field", style="cyan")
        table.add_column("Level", justify="center")
        table.add_column("Message")
        for field_key, message in result.errors.items():
            table.add_row(msg.format_field_name(field_key), "[red]error[/red]", message)
        for field_key, message in result.warnings.items():
            table.add_row(msg.format_field_name(field_key), "[yellow]warning[/yellow]", message)
        console.print(table)

    for suggestion in result.suggestions:
        console.print(f"  💡 {suggestion}")


# ===== COMMANDS =====


@app.command()
def validate(
    values: Path = typer.Argument(..., help="Path to JSON object of field values", exists=True),
    step: Optional[str] = typer.Option(
        None,
        "--step",
        "-s",
        help="Validate a single step (default: every declared step)",
    ),
):
    """
    Validate form values step by step. Exits 1 on any hard error.
    """
    engine = _build_engine()
    data = _load_values(values)

    if step is not None and engine.config.step(step) is None:
        console.print(f"[red]✗ Unknown step: {step}[/red]")
        raise typer.Exit(1)

    step_names = [step] if step else list(engine.config.steps)

    has_errors = False
    for step_name in step_names:
        result = engine.validate_step(step_name, data)
        _display_step_result(step_name, engine.config.steps[step_name].label, result)
        has_errors = has_errors or not result.is_valid

    if has_errors:
        raise typer.Exit(1)


@app.command()
def summary(
    values: Path = typer.Argument(..., help="Path to JSON object of field values", exists=True),
):
    """
    Show formatted selections and completion for form values.
    """
    engine = _build_engine()
    data = _load_values(values)

    table = Table(title="Selections", box=box.ROUNDED)
    table.add_column("Field", style="cyan")
    table.add_column("Selection", style="green")
    for item in engine.selection_summary(data):
        table.add_row(msg.format_field_name(item.field), item.value)
    console.print(table)

    progress = Table(title="Completion", box=box.ROUNDED)
    progress.add_column("Step", style="cyan")
    progress.add_column("Complete", justify="right", style="yellow")
    progress.add_column("Can Proceed", justify="center")
    for step_name, step_config in engine.config.steps.items():
        state = engine.step_selection_state(step_name, data)
        progress.add_row(
            step_config.label,
            f"{engine.step_completion(step_name, data)}%",
            "✅" if state.can_proceed else "—",
        )
    console.print(progress)
    console.print(f"\n[bold]Overall:[/bold] {engine.overall_completion(data)}%")


@app.command()
def steps():
    """
    List declared wizard steps and their fields.
    """
    engine = _build_engine()

    table = Table(title="Wizard Steps", box=box.ROUNDED)
    table.add_column("Step", style="cyan")
    table.add_column("Fields")
    table.add_column("Gating")
    table.add_column("Groups")

    for step_name, step_config in engine.config.steps.items():
        table.add_row(
            step_name,
            ", ".join(msg.short_field_name(f) for f in step_config.declared_fields),
            ", ".join(msg.short_field_name(f) for f in step_config.gating_fields) or "—",
            ", ".join(g.name for g in step_config.progressive_groups) or "—",
        )

    console.print(table)


if __name__ == "__main__":
    app()
