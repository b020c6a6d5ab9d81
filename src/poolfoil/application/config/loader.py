"""Loading foil plan configuration files.

Loading runs in three stages, each with its own ConfigError category:
reading the file, parsing the JSON and validating it against the schema.
Schema problems carry both the config path (``stairs.step_height``) and a
label a pool builder recognises ("Stairs > step height").
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from poolfoil.application.config.schema import FoilPlanConfiguration

SECTION_LABELS: dict[str, str] = {
    "schema_version": "Schema version",
    "pool": "Pool",
    "stairs": "Stairs",
    "splash_pool": "Splash pool",
    "material": "Material",
    "planning": "Planning",
}

# List fields whose items read better by number, e.g. "vertex 3".
_ITEM_NOUNS: dict[str, str] = {"vertices": "vertex"}


class ConfigError(Exception):
    """A configuration file that cannot be turned into a plan input.

    Attributes:
        message: Summary of the problem.
        error_type: Stage that failed: file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: Configuration file, when loading from disk.
        details: One dict per problem. JSON errors carry line, column,
            message and the offending text; schema errors carry path,
            field, section, message, value and error_type.
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

    def by_section(self) -> dict[str, list[dict[str, Any]]]:
        """Schema problems grouped by section label, in file order."""
        grouped: dict[str, list[dict[str, Any]]] = {}
        for detail in self.details:
            section = SECTION_LABELS.get(detail.get("section", ""), "Configuration")
            grouped.setdefault(section, []).append(detail)
        return grouped


def config_path(loc: tuple[str | int, ...]) -> str:
    """Dotted path for a pydantic location, e.g. ``pool.vertices[2].x``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def field_label(loc: tuple[str | int, ...]) -> str:
    """Readable label for a pydantic location, e.g. "Pool > vertex 3 > x"."""
    if not loc:
        return "Configuration"
    labels: list[str] = []
    previous: str | int | None = None
    for part in loc:
        if isinstance(part, int):
            noun = _ITEM_NOUNS.get(str(previous))
            if noun and labels:
                labels[-1] = f"{noun} {part + 1}"
            else:
                labels.append(f"item {part + 1}")
        elif not labels:
            labels.append(SECTION_LABELS.get(part, part.replace("_", " ")))
        else:
            labels.append(part.replace("_", " "))
        previous = part
    return " > ".join(labels)


def _problem(err: dict[str, Any]) -> dict[str, Any]:
    loc = tuple(err["loc"])
    return {
        "path": config_path(loc),
        "field": field_label(loc),
        "section": str(loc[0]) if loc else "",
        "message": err["msg"].removeprefix("Value error, "),
        "value": err.get("input"),
        "error_type": err["type"],
    }


def _summary(details: list[dict[str, Any]]) -> str:
    lines = [f"Configuration has {len(details)} problem(s):"]
    for detail in details:
        line = f"  - {detail['field']}: {detail['message']}"
        value = detail["value"]
        # Whole sections are too noisy to echo back.
        if value is not None and not isinstance(value, (dict, list)):
            line += f" (got {value!r})"
        lines.append(f"{line} [{detail['path'] or '(root)'}]")
    return "\n".join(lines)


def _read(path: Path) -> str:
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )


def _parse(content: str, path: Path | None) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        source_lines = content.splitlines()
        text = source_lines[e.lineno - 1] if 0 < e.lineno <= len(source_lines) else ""
        raise ConfigError(
            message=f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
            error_type="json_parse",
            path=path,
            details=[
                {"line": e.lineno, "column": e.colno, "message": e.msg, "text": text.strip()}
            ],
        )


def _validate(data: Any, path: Path | None = None) -> FoilPlanConfiguration:
    try:
        return FoilPlanConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = [_problem(err) for err in e.errors()]
        raise ConfigError(
            message=_summary(details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_config(path: Path) -> FoilPlanConfiguration:
    """Load and validate a foil plan configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated. The
            error_type attribute names the failing stage.
    """
    return _validate(_parse(_read(path), path), path)


def load_config_from_dict(data: dict[str, Any]) -> FoilPlanConfiguration:
    """Validate an already-parsed configuration.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
