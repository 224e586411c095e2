"""Project export/import as versioned JSON."""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import Field, ValidationError

from frameplanner.dsl.schema import Frame, ProjectState, SceneModel, Wall

logger = logging.getLogger(__name__)

EXPORT_VERSION = 1


class ProjectImportError(ValueError):
    """Raised when an export file cannot be imported."""


class ProjectExport(SceneModel):
    """On-disk project file."""

    version: int = EXPORT_VERSION
    exported_at: str = Field(description="ISO-8601 UTC timestamp")
    wall: Wall
    frames: list[Frame]
    images: dict[str, str] = Field(
        default_factory=dict, description="Image id -> data URL"
    )


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


def export_project(state: ProjectState, images: dict[str, str] | None = None) -> str:
    """Serialize the wall and frames to indented JSON.

    Args:
        state: Project snapshot to export.
        images: Optional image blobs keyed by image id.

    Returns:
        JSON text with camelCase keys.
    """
    data = ProjectExport(
        version=EXPORT_VERSION,
        exported_at=_utc_timestamp(),
        wall=state.wall,
        frames=list(state.frames),
        images=images or {},
    )
    return json.dumps(data.model_dump(mode="json", by_alias=True), indent=2)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_shape(data: Any) -> None:
    """Report the first missing top-level field the way users see it.

    Wall values must already have their JSON types; numbers sent as strings
    or a missing color are rejected rather than coerced.
    """
    if not isinstance(data, dict):
        raise ProjectImportError("Invalid export data: validation failed")

    if not _is_number(data.get("version")):
        raise ProjectImportError("Invalid export data: missing or invalid version field")
    wall = data.get("wall")
    if not isinstance(wall, dict):
        raise ProjectImportError("Invalid export data: missing or invalid wall field")
    if not isinstance(data.get("frames"), list):
        raise ProjectImportError("Invalid export data: missing or invalid frames field")

    if not (
        _is_number(wall.get("width"))
        and _is_number(wall.get("height"))
        and isinstance(wall.get("color"), str)
    ):
        raise ProjectImportError("Invalid export data: validation failed")


def import_project(text: str) -> ProjectExport:
    """Parse and validate an exported project.

    Args:
        text: JSON produced by ``export_project``.

    Returns:
        The validated ProjectExport.

    Raises:
        ProjectImportError: If the text is not JSON or not a valid export.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectImportError("Failed to parse JSON: invalid format") from e

    _check_shape(data)

    try:
        project = ProjectExport.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Rejected project import: {e.error_count()} validation error(s)")
        raise ProjectImportError("Invalid export data: validation failed") from e

    logger.info(f"Imported project v{project.version} with {len(project.frames)} frame(s)")
    return project
