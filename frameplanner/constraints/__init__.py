"""Alignment and snapping engine - guides, spacing and distribution."""

from frameplanner.constraints.alignment import (
    AlignmentConstraint,
    AlignType,
    align_frames,
    apply_updates,
)
from frameplanner.constraints.engine import DragResult, SnapEngine, resolve_drag
from frameplanner.constraints.geometry import Rect, edges_of
from frameplanner.constraints.snapping import find_snap_guides, get_snap_targets
from frameplanner.constraints.spacing import find_spacing_guides

__all__ = [
    # Engine
    "DragResult",
    "SnapEngine",
    "resolve_drag",
    # Geometry
    "Rect",
    "edges_of",
    # Snapping
    "find_snap_guides",
    "get_snap_targets",
    # Spacing
    "find_spacing_guides",
    # Alignment
    "AlignmentConstraint",
    "AlignType",
    "align_frames",
    "apply_updates",
]
