"""Pack command: compute and print the cutting plan of a job file."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from cutplan.application import PlanCutsCommand
from cutplan.application.config import ConfigError, load_config
from cutplan.cli.commands.validate import display_load_error
from cutplan.domain.value_objects import PackingMode
from cutplan.infrastructure import JsonExporter, PackingSummaryFormatter

logger = logging.getLogger(__name__)

# Exit code when the plan leaves parts unplaced
EXIT_UNPLACED = 3


class OutputFormat(str, Enum):
    """Output formats of the pack command."""

    TEXT = "text"
    JSON = "json"


def pack_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    mode: Annotated[
        PackingMode | None,
        typer.Option("--mode", "-m", help="Override the job's packing mode"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to a file"),
    ] = None,
    details: Annotated[
        bool,
        typer.Option("--details", help="List every placement in text output"),
    ] = False,
) -> None:
    """Compute a cutting plan for a job file.

    Exit codes:
        0 - Every part was placed
        1 - The job file could not be loaded
        3 - Some parts could not be placed

    Example:
        cutplan pack kitchen.json --format json -o plan.json
    """
    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = PlanCutsCommand().execute(config, mode=mode)

    if output_format is OutputFormat.JSON:
        output = JsonExporter().export(result)
    else:
        formatter = PackingSummaryFormatter()
        output = formatter.format(result)
        if details:
            sheets = [
                formatter.format_sheet(sheet, number)
                for number, sheet in enumerate(result.bins, start=1)
            ]
            output = "\n\n".join([output, *sheets])

    if output_file is not None:
        output_file.write_text(output + "\n", encoding="utf-8")
        typer.echo(f"Cutting plan written to {output_file}")
    else:
        typer.echo(output)

    if result.unplaced:
        typer.echo(
            f"Warning: {len(result.unplaced)} part(s) could not be placed",
            err=True,
        )
        raise typer.Exit(code=EXIT_UNPLACED)
