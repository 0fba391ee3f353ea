"""Typer CLI for guillotine cut planning."""

import logging
from typing import Annotated

import typer

from cutplan.cli.commands import pack_command, validate_command

app = typer.Typer(
    name="cutplan",
    help="Plan guillotine cutting layouts for rectangular parts on stock boards.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """Plan guillotine cutting layouts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command(name="pack")(pack_command)
app.command(name="validate")(validate_command)


if __name__ == "__main__":
    app()
