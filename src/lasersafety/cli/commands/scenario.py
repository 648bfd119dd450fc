"""Scenario commands: evaluate and validate JSON scenario files.

Exit codes for ``validate``:
    0 - Scenario is valid with no warnings
    1 - Scenario has errors (cannot be evaluated)
    2 - Scenario is valid but has warnings
"""

from pathlib import Path
from typing import Annotated

import typer

from lasersafety.application.commands import EvaluateScenarioCommand
from lasersafety.application.config import (
    ConfigError,
    ValidationResult,
    config_to_scenario,
    config_to_service_config,
    load_scenario,
    validate_scenario,
)
from lasersafety.domain.services.laser import LaserSafetyService
from lasersafety.infrastructure import JsonExporter, ReportFormatter

from .limits import JsonOption, TraceOption

ScenarioArgument = Annotated[
    Path, typer.Argument(help="Path to the JSON scenario file")
]


def evaluate_command(
    scenario_file: ScenarioArgument,
    trace: TraceOption = False,
    as_json: JsonOption = False,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to a file instead of stdout"),
    ] = None,
) -> None:
    """Run every analysis a scenario file asks for.

    Example:
        laser-safety evaluate green-pointer.json --trace
    """
    try:
        config = load_scenario(scenario_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    validation = validate_scenario(config)
    if not validation.is_valid:
        _display_validation_result(validation)
        raise typer.Exit(code=1)

    command = EvaluateScenarioCommand(LaserSafetyService(config_to_service_config(config)))
    report = command.execute(config_to_scenario(config))

    include_trace = trace or config.outputs.trace
    if as_json:
        text = JsonExporter(include_trace=include_trace).export(report)
    else:
        text = ReportFormatter(include_trace=include_trace).format(report)

    if output_file is not None:
        output_file.write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Report written to {output_file}")
    else:
        typer.echo(text)

    if not report.is_valid:
        raise typer.Exit(code=1)


def validate_command(scenario_file: ScenarioArgument) -> None:
    """Validate a scenario file without evaluating it.

    Checks the file for:
    - JSON syntax errors
    - Schema validation errors (missing fields, out-of-range values)
    - Scenario advisories (impossible pulse trains, N/A ranges, collimated beams)

    Example:
        laser-safety validate green-pointer.json
    """
    typer.echo(f"Validating {scenario_file}...")
    typer.echo()

    try:
        config = load_scenario(scenario_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_scenario(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def _display_load_error(error: ConfigError) -> None:
    """Display a scenario loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, dict):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
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
        typer.echo("Validation passed. Scenario is valid.")
