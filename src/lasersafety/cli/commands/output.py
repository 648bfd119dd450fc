"""Shared output helpers for the laser-safety CLI."""

from __future__ import annotations

import json
from typing import Any

import typer

__all__ = [
    "echo_result",
    "echo_trace",
]


def echo_trace(trace: tuple[str, ...] | list[str], indent: str = "  ") -> None:
    """Print a derivation trace, one step per line."""
    typer.echo("Trace:")
    for line in trace:
        typer.echo(f"{indent}{line}")


def echo_result(
    message: str,
    data: dict[str, Any],
    as_json: bool,
    trace: tuple[str, ...] | list[str] = (),
    show_trace: bool = False,
) -> None:
    """Print a result as its one-line message or as JSON.

    Args:
        message: Human-readable summary line.
        data: JSON-safe dictionary of the result.
        as_json: Print ``data`` as JSON instead of the message.
        trace: Derivation trace of the result.
        show_trace: Print the trace after the message.
    """
    if as_json:
        typer.echo(json.dumps(data, indent=2))
        return
    typer.echo(message)
    if show_trace and trace:
        echo_trace(trace)
