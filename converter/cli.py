"""
Command-line interface for the planner exporter.

Usage:
    python -m converter export schedule-db.json -o public/course-data-constructed.json
    python -m converter validate public/course-data-constructed.json
    python -m converter summary schedule-db.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import ExportSettings, configure_logging, get_settings
from .data.loader import (
    find_consistency_warnings,
    load_planner_document,
    load_schedule_database,
)
from .data.models import ScheduleDatabase
from .exceptions import ConverterError, DataValidationError
from .exporter import ScheduleExporter
from .output.formatters import ConsoleFormatter
from .output.schema import PlannerDocument, create_planner_document

# Create Typer app
app = typer.Typer(
    name="planner-export",
    help="Convert academic schedule data into the planner course-data document.",
    add_completion=False,
)

# Rich console for pretty output
console = Console()


# =============================================================================
# Helper Functions
# =============================================================================

def load_input(input_path: Path) -> ScheduleDatabase:
    """Load and validate a schedule database dump."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(code=1)

    try:
        return load_schedule_database(input_path)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON:[/red] {e}")
        raise typer.Exit(code=1)
    except DataValidationError as e:
        console.print("[red]Schema validation failed:[/red]")
        for error in e.errors:
            console.print(f"   {error}")
        raise typer.Exit(code=1)


def print_counts(counts: dict[str, int], title: str = "Summary") -> None:
    """Print entity counts as a table."""
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Entity", style="cyan")
    table.add_column("Count", style="white")

    for name, count in counts.items():
        table.add_row(name.capitalize(), str(count))

    console.print(table)


def print_warnings(warnings: list[str]) -> None:
    if warnings:
        console.print("[yellow]Warnings found:[/yellow]")
        for w in warnings:
            console.print(f"   - {w}")


# =============================================================================
# Commands
# =============================================================================

@app.command()
def export(
    input_file: Path = typer.Argument(
        ...,
        help="Path to the schedule database JSON dump",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Where to write the planner document (default: configured output path)",
    ),
    indent: Optional[int] = typer.Option(
        None,
        "--indent",
        help="Indent the JSON output (default: compact)",
        min=0,
        max=8,
    ),
    mkdir: bool = typer.Option(
        False,
        "--mkdir",
        help="Create the output directory if it does not exist",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
) -> None:
    """
    Export a schedule database as a planner document.

    Example:
        python -m converter export schedule-db.json -o public/course-data-constructed.json
    """
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, settings.json_logs)

    overrides: dict = {}
    if output is not None:
        overrides["output_path"] = output
    if indent is not None:
        overrides["indent"] = indent
    if mkdir:
        overrides["create_parent_dirs"] = True
    settings = ExportSettings.model_validate({**settings.model_dump(), **overrides})

    console.print(f"\n[bold]Loading input from:[/bold] {input_file}")
    database = load_input(input_file)

    print_warnings(find_consistency_warnings(database))

    try:
        result = ScheduleExporter(settings).export(database)
    except ConverterError as e:
        console.print(f"[red]Export failed:[/red] {e}")
        raise typer.Exit(code=1)

    console.print()
    print_counts({
        "departments": result.departments,
        "courses": result.courses,
        "sections": result.sections,
        "periods": result.periods,
    })
    console.print(f"\n[green]Planner document saved to:[/green] {result.path} ({result.bytes_written} bytes)\n")


@app.command()
def validate(
    document_file: Path = typer.Argument(
        ...,
        help="Path to a planner document to validate",
    ),
) -> None:
    """
    Validate a planner document.

    Checks for:
    - Valid JSON structure
    - Required keys and value types
    - Derived fields (term letters, HH:MM times, day order, locations)

    Example:
        python -m converter validate public/course-data-constructed.json
    """
    console.print(f"\n[bold]Validating:[/bold] {document_file}\n")

    if not document_file.exists():
        console.print(f"[red]Error:[/red] File not found: {document_file}")
        raise typer.Exit(code=1)

    try:
        document = load_planner_document(document_file)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON:[/red] {e}")
        raise typer.Exit(code=1)
    except DataValidationError as e:
        console.print("[red]Validation failed:[/red]")
        for error in e.errors:
            console.print(f"   {error}")
        raise typer.Exit(code=1)

    print_counts(document.counts())
    console.print("\n[green]Validation complete.[/green]\n")


@app.command()
def summary(
    input_file: Path = typer.Argument(
        ...,
        help="Path to the schedule database JSON dump",
    ),
) -> None:
    """
    Show departments and sections per term for a schedule database.

    Example:
        python -m converter summary schedule-db.json
    """
    database = load_input(input_file)

    try:
        document: PlannerDocument = create_planner_document(database)
    except ConverterError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    counts = database.summary()
    console.print(Panel(
        f"[bold]Generated[/bold] {counts.pop('generated')}",
        title="Schedule Database",
    ))
    print_counts(counts)

    formatter = ConsoleFormatter()
    console.print(formatter.department_table(document))
    console.print(formatter.term_table(document))
    print_warnings(find_consistency_warnings(database))


# =============================================================================
# Main Entry Point
# =============================================================================

def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
