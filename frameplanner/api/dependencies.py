"""FastAPI dependencies."""

from functools import lru_cache

from frameplanner.api.config import get_settings
from frameplanner.constraints.engine import SnapEngine
from frameplanner.store.project import ProjectStore


@lru_cache()
def get_store() -> ProjectStore:
    """The process-wide project store."""
    settings = get_settings()
    return ProjectStore(
        max_frames=settings.max_frames,
        undo_limit=settings.undo_limit,
        checkpoint_window=settings.checkpoint_window_seconds,
    )


def get_snap_engine(wall_width: float, wall_height: float) -> SnapEngine:
    """Snap engine for a wall, using the configured threshold."""
    return SnapEngine(wall_width, wall_height, get_settings().snap_threshold)
