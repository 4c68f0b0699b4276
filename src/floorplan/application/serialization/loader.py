"""Layout document loader with structured error reporting.

Reads stored layout and preset documents, converting file system, JSON
and schema failures into :class:`LayoutFormatError` with JSON paths that
point at the offending field.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from floorplan.application.serialization.adapter import (
    layout_to_schema,
    presets_to_schema,
    schema_to_layout,
    schema_to_presets,
)
from floorplan.application.serialization.schema import LayoutSchema, PresetsFileSchema
from floorplan.domain.entities import Layout, PresetsFile

logger = logging.getLogger(__name__)


class LayoutFormatError(Exception):
    """Raised when a stored document cannot be read or does not validate.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, file_read_error,
            json_parse, validation)
        path: Path of the offending file, if any
        details: Per-field details (JSON path, message, offending value)
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


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("settings", "gridSize"))
        'settings.gridSize'
        >>> _format_json_path(("entities", 2, "wall", "points"))
        'entities[2].wall.points'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(
    heading: str, details: list[dict[str, Any]]
) -> str:
    lines = [heading]
    for detail in details:
        path = detail["path"] or "(root)"
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {detail['message']}")
    return "\n".join(lines)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise LayoutFormatError(
            message=f"File not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LayoutFormatError(
            message=f"Error reading file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise LayoutFormatError(
            message=(
                f"Invalid JSON in {path} (line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e


def load_layout_from_dict(data: Any, path: Path | None = None) -> Layout:
    """Validate a decoded JSON document and build a :class:`Layout`.

    Raises:
        LayoutFormatError: With ``error_type="validation"`` when the data
            does not match the layout schema.
    """
    try:
        schema = LayoutSchema.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        where = f" in {path}" if path is not None else ""
        raise LayoutFormatError(
            message=_format_validation_error_message(
                f"Layout validation failed{where}:", details
            ),
            error_type="validation",
            path=path,
            details=details,
        ) from e
    return schema_to_layout(schema)


def load_layout(path: Path) -> Layout:
    """Load and validate a layout document from a JSON file.

    Args:
        path: Path to the ``<slug>.json`` document.

    Returns:
        The validated layout.

    Raises:
        LayoutFormatError: If the file is missing, unreadable, not JSON or
            fails validation. ``error_type`` names the category.
    """
    data = _read_json(path)
    layout = load_layout_from_dict(data, path=path)
    logger.debug(f"Loaded layout '{layout.slug}' from {path}")
    return layout


def dump_layout(layout: Layout) -> dict[str, Any]:
    """Convert a layout into its JSON-ready stored form (camelCase keys)."""
    return layout_to_schema(layout).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )


def load_presets_from_dict(data: Any, path: Path | None = None) -> PresetsFile:
    """Validate a decoded presets document."""
    try:
        schema = PresetsFileSchema.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise LayoutFormatError(
            message=_format_validation_error_message("Presets validation failed:", details),
            error_type="validation",
            path=path,
            details=details,
        ) from e
    return schema_to_presets(schema)


def load_presets(path: Path) -> PresetsFile:
    """Load and validate the preset library from a JSON file."""
    return load_presets_from_dict(_read_json(path), path=path)


def dump_presets(presets: PresetsFile) -> dict[str, Any]:
    return presets_to_schema(presets).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )
