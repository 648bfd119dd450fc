"""Reading scenario files.

A scenario goes through three stages (read, JSON decode, schema check)
and every failure is raised as ConfigError. The ``error_type`` names the
stage that failed so the CLI and the API can render it differently.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from lasersafety.application.config.schema import ScenarioConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """A scenario that could not be turned into a ScenarioConfiguration.

    ``error_type`` is one of file_not_found, permission_denied,
    file_read_error, json_parse or validation. ``details`` holds one
    dict per problem: line/column/message for JSON errors,
    path/message/value/error_type for schema errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _dotted(loc: tuple[str | int, ...]) -> str:
    """("laser", "wavelength_nm") -> laser.wavelength_nm; list indices in brackets."""
    text = "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in loc)
    return text.lstrip(".") or "(root)"


def _schema_error(error: PydanticValidationError, path: Path | None) -> ConfigError:
    details = [
        {
            "path": _dotted(item["loc"]),
            "message": item["msg"],
            "value": item.get("input"),
            "error_type": item["type"],
        }
        for item in error.errors()
    ]
    summary = ["Scenario validation failed:"]
    for detail in details:
        got = detail["value"]
        suffix = "" if got is None or isinstance(got, dict) else f" (got: {got!r})"
        summary.append(f"  - {detail['path']}: {detail['message']}{suffix}")
    return ConfigError("\n".join(summary), "validation", path, details)


def _validate(data: Any, path: Path | None = None) -> ScenarioConfiguration:
    if not isinstance(data, dict):
        raise ConfigError(
            f"Scenario file must contain a JSON object: {path}",
            "validation",
            path,
            [{"path": "(root)", "message": "expected an object", "value": None}],
        )
    try:
        return ScenarioConfiguration.model_validate(data)
    except PydanticValidationError as e:
        raise _schema_error(e, path) from e


def _read(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"Scenario file not found: {path}", "file_not_found", path)
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading scenario file: {path}", "permission_denied", path
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading scenario file: {path}: {e}", "file_read_error", path
        ) from e


def load_scenario(path: Path) -> ScenarioConfiguration:
    """Read, decode and validate a JSON scenario file.

    Raises:
        ConfigError: At the first stage that fails.
    """
    content = _read(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in scenario file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    config = _validate(data, path)
    logger.debug(f"Loaded scenario {config.name or path.name} (schema {config.schema_version})")
    return config


def load_scenario_from_dict(data: dict[str, Any]) -> ScenarioConfiguration:
    """Validate a scenario that arrived as a dict, e.g. an API request body."""
    return _validate(data)
