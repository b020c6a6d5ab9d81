"""The ``validate`` command.

Loads a pool configuration, prints what the planner will work with and
lists problems grouped by configuration section, so an installer can fix
the stairs block without reading through pool and planning messages.
"""

from pathlib import Path
from typing import Annotated

import typer

from poolfoil.application.config import (
    SECTION_LABELS,
    ConfigError,
    ValidationResult,
    describe_config,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON pool configuration file"),
    ],
) -> None:
    """Check a pool configuration before planning.

    Reports JSON and schema problems, stairs or splash pool footprints that
    leave the pool, and foil advisories such as deep walls or seams below
    the manufacturer minimum.

    Exit codes:
        0 - Ready to plan
        1 - Errors; the configuration cannot be planned
        2 - Plannable, with warnings

    Example:
        poolfoil validate my-pool.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    for label, text in describe_config(config):
        typer.echo(f"{label + ':':<11}{text}")
    typer.echo()

    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def display_load_error(error: ConfigError) -> None:
    """Explain why a configuration file could not be loaded."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            typer.echo(
                f"    Line {detail['line']}, column {detail['column']}: {detail['message']}",
                err=True,
            )
            if detail.get("text"):
                typer.echo(f"      > {detail['text']}", err=True)
    elif error.error_type == "validation":
        for section, details in error.by_section().items():
            typer.echo(f"  {section}", err=True)
            for detail in details:
                typer.echo(
                    f"    {detail['path'] or '(root)'}: {detail['message']}", err=True
                )
                value = detail.get("value")
                if value is not None and not isinstance(value, (dict, list)):
                    typer.echo(f"      got {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _section_label(section: str) -> str:
    return SECTION_LABELS.get(section, "Configuration")


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        current = None
        for error in sorted(result.errors, key=lambda e: e.section):
            if error.section != current:
                current = error.section
                typer.echo(f"  {_section_label(current)}", err=True)
            typer.echo(f"    {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"      got {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        current = None
        for warning in sorted(result.warnings, key=lambda w: w.section):
            if warning.section != current:
                current = warning.section
                typer.echo(f"  {_section_label(current)}")
            typer.echo(f"    {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"      -> {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")
