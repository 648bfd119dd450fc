"""Typer CLI for laser exposure limits and hazard analysis."""

import logging
from typing import Annotated

import typer

from lasersafety.cli.commands import (
    ael_command,
    classify_command,
    critical_command,
    evaluate_command,
    eyewear_command,
    mpe_command,
    nohd_command,
    pulse_train_command,
    validate_command,
)
from lasersafety.logging_config import setup_logging

app = typer.Typer(
    name="laser-safety",
    help="Evaluate laser exposure limits, hazard distances, classes and eyewear.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log engine decisions to stderr")
    ] = False,
) -> None:
    """Laser safety calculations in the IEC 60825-1 style (advisory only)."""
    if verbose:
        setup_logging(logging.DEBUG)


# Exposure limits
app.command(name="mpe")(mpe_command)
app.command(name="ael")(ael_command)
app.command(name="pulse-train")(pulse_train_command)
app.command(name="critical")(critical_command)

# Hazard analyses
app.command(name="nohd")(nohd_command)
app.command(name="classify")(classify_command)
app.command(name="eyewear")(eyewear_command)

# Scenario files
app.command(name="evaluate")(evaluate_command)
app.command(name="validate")(validate_command)


if __name__ == "__main__":
    app()
