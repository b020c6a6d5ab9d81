"""Command-line interface for poolfoil.

Commands:
    plan      Plan foil strips and rolls for a pool configuration
    validate  Check a configuration file for errors and warnings
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from poolfoil.application import PlanFoilLayoutCommand
from poolfoil.application.config import (
    ConfigError,
    config_to_material,
    config_to_packing,
    config_to_plan_inputs,
    config_to_settings,
    load_config,
)
from poolfoil.cli.commands import display_load_error, validate_command
from poolfoil.domain.value_objects import OptimizationPriority, PlanStrategy, WallLayout
from poolfoil.infrastructure import PlanJsonExporter, PlanReportFormatter

app = typer.Typer(
    name="poolfoil",
    help="Plan pool liner foil strips and roll purchases.",
)

app.command(name="validate")(validate_command)

OUTPUT_FORMATS = ("text", "json")


@app.command()
def plan(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON pool configuration file"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the plan to this file"),
    ] = None,
    strategy: Annotated[
        PlanStrategy | None,
        typer.Option(
            "--strategy",
            "-s",
            help="Roll width strategy (overrides the configuration file)",
        ),
    ] = None,
    priority: Annotated[
        OptimizationPriority | None,
        typer.Option(
            "--priority",
            "-p",
            help="Continuous wall ranking (overrides the configuration file)",
        ),
    ] = None,
    continuous_walls: Annotated[
        bool,
        typer.Option(
            "--continuous-walls",
            help="Let wall strips run around corners",
        ),
    ] = False,
    separate_structural: Annotated[
        bool,
        typer.Option(
            "--separate-structural",
            help="Put treads and splash floors on structural anti-slip rolls",
        ),
    ] = False,
    no_strips: Annotated[
        bool,
        typer.Option("--no-strips", help="Leave the strip listing out of text reports"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log planning decisions"),
    ] = False,
) -> None:
    """Plan foil strips and rolls for a pool.

    Exit codes:
        0 - Plan produced without errors
        1 - Configuration could not be loaded
        2 - Plan produced but it has errors (placement or seam rules)

    Example:
        poolfoil plan my-pool.json --format json -o plan.json
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: Unknown format '{output_format}'. "
            f"Choose from: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        pool, stairs, splash_pool = config_to_plan_inputs(config)
        settings = config_to_settings(config.planning)
        if priority is not None:
            settings = replace(settings, priority=priority)
        if continuous_walls:
            settings = replace(settings, wall_layout=WallLayout.CONTINUOUS)
        if separate_structural:
            settings = replace(settings, separate_structural=True)
        command = PlanFoilLayoutCommand(
            settings=settings,
            material=config_to_material(config.material),
            packing_config=config_to_packing(config.planning),
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    result = command.execute(pool, stairs, splash_pool, strategy)

    if output_format == "json":
        output = PlanJsonExporter().export(result)
    else:
        output = PlanReportFormatter(include_strips=not no_strips).format(result)

    if output_file is not None:
        output_file.write_text(output + "\n", encoding="utf-8")
        typer.echo(f"Plan written to {output_file}")
    else:
        typer.echo(output)

    if result.has_errors:
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
