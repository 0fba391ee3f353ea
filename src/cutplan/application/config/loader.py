"""Loading of JSON job files into validated configurations.

Every failure surfaces as a ConfigError whose ``error_type`` is one of
``file_not_found``, ``file_read_error``, ``json_parse`` or ``validation``.
The CLI prints ``details`` per type; the REST API returns them as-is.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cutplan.application.config.schema import CutPlanConfiguration


class ConfigError(Exception):
    """A job file or payload that cannot be turned into a configuration.

    Attributes:
        message: Human-readable summary.
        error_type: Failure category (see module docstring).
        path: Job file involved, if any.
        details: Structured entries; ``line``/``column``/``message`` for JSON
            errors, ``path``/``message``/``value`` for validation errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str,
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []


def _json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic location as ``parts[0].width``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _validate(data: Any, path: Path | None = None) -> CutPlanConfiguration:
    try:
        return CutPlanConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                "path": _json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
            }
            for err in e.errors()
        ]
        summary = "; ".join(f"{d['path'] or '(root)'}: {d['message']}" for d in details)
        raise ConfigError(
            f"Invalid job configuration: {summary}", "validation", path, details
        ) from e


def load_config(path: Path) -> CutPlanConfiguration:
    """Read, parse and validate a JSON job file.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or does
            not match the schema.
    """
    if not path.is_file():
        raise ConfigError(f"Job file not found: {path}", "file_not_found", path)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", "file_read_error", path) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> CutPlanConfiguration:
    """Validate a job that is already parsed, e.g. a REST request body."""
    return _validate(data)
