"""Project state, undo/redo history and store actions."""

from frameplanner.store.history import ProjectHistory
from frameplanner.store.project import ProjectStore, new_frame_id

__all__ = ["ProjectHistory", "ProjectStore", "new_frame_id"]
