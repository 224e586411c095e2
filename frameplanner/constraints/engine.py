"""Drag snapping: combines snap guides and spacing guides into one position."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from frameplanner.constraints.geometry import edges_of
from frameplanner.constraints.snapping import find_snap_guides, get_snap_targets
from frameplanner.constraints.spacing import find_spacing_guides
from frameplanner.engine.positioned import Positioned, SnapGuide, SpacingGuide
from frameplanner.engine.units import SNAP_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass
class _MovedObject:
    """A positioned object at a trial drag position."""

    id: str
    x: float
    y: float
    width: float
    height: float


@dataclass
class DragResult:
    """Snapped position of a dragged object plus the guides to draw."""

    x: float
    y: float
    guides: list[SnapGuide] = field(default_factory=list)
    spacing_guides: list[SpacingGuide] = field(default_factory=list)

    @property
    def snapped(self) -> bool:
        return bool(self.guides) or bool(self.spacing_guides)


class SnapEngine:
    """Resolves drag positions against the wall and the other objects."""

    def __init__(
        self,
        wall_width: float,
        wall_height: float,
        snap_threshold: float = SNAP_THRESHOLD,
    ) -> None:
        """Initialize the snap engine.

        Args:
            wall_width: Wall width in cm.
            wall_height: Wall height in cm.
            snap_threshold: Snap distance in screen units.
        """
        self.wall_width = wall_width
        self.wall_height = wall_height
        self.snap_threshold = snap_threshold

    def threshold_for_scale(self, view_scale: float) -> float:
        """Snap distance in cm at the given view scale (screen px per cm)."""
        return self.snap_threshold / view_scale

    def resolve_drag(
        self,
        objects: Sequence[Positioned],
        moving_id: str,
        x: float,
        y: float,
        view_scale: float = 1.0,
        snap_enabled: bool = True,
    ) -> DragResult:
        """Snap a dragged object's raw position.

        Snap guides win on their axis. An axis without a snap guide takes the
        offset of the first spacing guide along it (H for x, V for y).

        Args:
            objects: All objects on the wall, the moving one included.
            moving_id: ID of the dragged object.
            x: Raw left position in cm.
            y: Raw top position in cm.
            view_scale: Current screen px per cm.
            snap_enabled: When False the raw position is returned unchanged.

        Returns:
            DragResult with the snapped position and active guides.
        """
        if not snap_enabled:
            return DragResult(x=x, y=y)

        current: Optional[Positioned] = None
        for obj in objects:
            if obj.id == moving_id:
                current = obj
                break
        if current is None:
            logger.debug(f"Drag of unknown object {moving_id} left unsnapped")
            return DragResult(x=x, y=y)

        moving = _MovedObject(
            id=moving_id, x=x, y=y, width=current.width, height=current.height
        )
        threshold = self.threshold_for_scale(view_scale)

        targets = get_snap_targets(objects, self.wall_width, self.wall_height, moving_id)
        guides = find_snap_guides(targets, edges_of(moving), threshold)

        others = [o for o in objects if o.id != moving_id]
        spacing_guides = find_spacing_guides(others, moving, threshold)

        snapped_x = x
        snapped_y = y
        for guide in guides:
            if guide.orientation == "V":
                snapped_x = x + guide.snap_offset
            else:
                snapped_y = y + guide.snap_offset

        if not any(g.orientation == "V" for g in guides):
            for spacing in spacing_guides:
                if spacing.orientation == "H":
                    snapped_x = x + spacing.snap_offset
                    break
        if not any(g.orientation == "H" for g in guides):
            for spacing in spacing_guides:
                if spacing.orientation == "V":
                    snapped_y = y + spacing.snap_offset
                    break

        return DragResult(
            x=snapped_x,
            y=snapped_y,
            guides=guides,
            spacing_guides=spacing_guides,
        )


def resolve_drag(
    objects: Sequence[Positioned],
    moving_id: str,
    x: float,
    y: float,
    wall_width: float,
    wall_height: float,
    threshold: float = SNAP_THRESHOLD,
) -> DragResult:
    """Convenience function: snap a drag with ``threshold`` already in cm."""
    engine = SnapEngine(wall_width, wall_height, snap_threshold=threshold)
    return engine.resolve_drag(objects, moving_id, x, y)
