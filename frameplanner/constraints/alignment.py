"""Batch alignment and distribution of selected frames.

The engine never touches the object store. It returns ``PositionUpdate``
deltas for the objects that actually move; the caller applies them by id.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from frameplanner.engine.positioned import Bounds, Positioned, PositionUpdate

logger = logging.getLogger(__name__)


class AlignType(str, Enum):
    """Alignment operations."""

    TOP = "top"
    BOTTOM = "bottom"
    CENTER_V = "centerV"
    LEFT = "left"
    RIGHT = "right"
    CENTER_H = "centerH"
    DISTRIBUTE_H = "distributeH"
    DISTRIBUTE_V = "distributeV"
    DISTRIBUTE_H_WALL_CENTER = "distributeHWallCenter"
    DISTRIBUTE_V_WALL_CENTER = "distributeVWallCenter"

    @property
    def is_distribute(self) -> bool:
        return self in (AlignType.DISTRIBUTE_H, AlignType.DISTRIBUTE_V)

    @property
    def is_wall_center(self) -> bool:
        return self in (
            AlignType.DISTRIBUTE_H_WALL_CENTER,
            AlignType.DISTRIBUTE_V_WALL_CENTER,
        )


@dataclass
class AlignmentConstraint:
    """Alignment of a resolved selection.

    ``objects`` is the selection in store order. Preconditions on its size
    are checked by ``apply``.
    """

    objects: Sequence[Positioned]
    align_type: AlignType
    bounds: Optional[Bounds] = None

    def apply(self) -> list[PositionUpdate]:
        """Apply the alignment.

        Returns:
            Updates for objects whose position changes; empty when the
            selection is too small for the operation.
        """
        count = len(self.objects)

        if self.align_type.is_wall_center:
            if count < 1 or self.bounds is None:
                return []
        else:
            if count < 2:
                return []
            if self.align_type.is_distribute and count < 3:
                return []

        if self.align_type == AlignType.TOP:
            return self._align_top()
        elif self.align_type == AlignType.BOTTOM:
            return self._align_bottom()
        elif self.align_type == AlignType.CENTER_V:
            return self._align_center_v()
        elif self.align_type == AlignType.LEFT:
            return self._align_left()
        elif self.align_type == AlignType.RIGHT:
            return self._align_right()
        elif self.align_type == AlignType.CENTER_H:
            return self._align_center_h()
        elif self.align_type == AlignType.DISTRIBUTE_H:
            return self._distribute_horizontal()
        elif self.align_type == AlignType.DISTRIBUTE_V:
            return self._distribute_vertical()
        elif self.align_type == AlignType.DISTRIBUTE_H_WALL_CENTER:
            return self._distribute_horizontal_on_wall(self.bounds.width)
        elif self.align_type == AlignType.DISTRIBUTE_V_WALL_CENTER:
            return self._distribute_vertical_on_wall(self.bounds.height)

        return []

    def _align_top(self) -> list[PositionUpdate]:
        """Align top edges to the topmost one."""
        target_y = min(o.y for o in self.objects)
        return [
            PositionUpdate(id=o.id, x=o.x, y=target_y)
            for o in self.objects
            if o.y != target_y
        ]

    def _align_bottom(self) -> list[PositionUpdate]:
        """Align bottom edges to the lowest one."""
        target_bottom = max(o.y + o.height for o in self.objects)
        return [
            PositionUpdate(id=o.id, x=o.x, y=target_bottom - o.height)
            for o in self.objects
            if o.y + o.height != target_bottom
        ]

    def _align_center_v(self) -> list[PositionUpdate]:
        """Align vertical centers to their mean."""
        target_center = sum(o.y + o.height / 2 for o in self.objects) / len(self.objects)
        return [
            PositionUpdate(id=o.id, x=o.x, y=target_center - o.height / 2)
            for o in self.objects
            if o.y + o.height / 2 != target_center
        ]

    def _align_left(self) -> list[PositionUpdate]:
        """Align left edges to the leftmost one."""
        target_x = min(o.x for o in self.objects)
        return [
            PositionUpdate(id=o.id, x=target_x, y=o.y)
            for o in self.objects
            if o.x != target_x
        ]

    def _align_right(self) -> list[PositionUpdate]:
        """Align right edges to the rightmost one."""
        target_right = max(o.x + o.width for o in self.objects)
        return [
            PositionUpdate(id=o.id, x=target_right - o.width, y=o.y)
            for o in self.objects
            if o.x + o.width != target_right
        ]

    def _align_center_h(self) -> list[PositionUpdate]:
        """Align horizontal centers to their mean."""
        target_center = sum(o.x + o.width / 2 for o in self.objects) / len(self.objects)
        return [
            PositionUpdate(id=o.id, x=target_center - o.width / 2, y=o.y)
            for o in self.objects
            if o.x + o.width / 2 != target_center
        ]

    def _distribute_horizontal(self) -> list[PositionUpdate]:
        """Equal gaps between objects, keeping the outermost ones in place.

        The gap goes negative when the objects are wider than their span;
        the result then overlaps and is returned as is.
        """
        sorted_objects = sorted(self.objects, key=lambda o: o.x)
        first = sorted_objects[0]
        last = sorted_objects[-1]
        total_space = last.x + last.width - first.x
        total_width = sum(o.width for o in sorted_objects)
        gap = (total_space - total_width) / (len(sorted_objects) - 1)

        return self._place_along_x(sorted_objects, first.x, gap)

    def _distribute_vertical(self) -> list[PositionUpdate]:
        """Equal gaps between objects, keeping the outermost ones in place."""
        sorted_objects = sorted(self.objects, key=lambda o: o.y)
        first = sorted_objects[0]
        last = sorted_objects[-1]
        total_space = last.y + last.height - first.y
        total_height = sum(o.height for o in sorted_objects)
        gap = (total_space - total_height) / (len(sorted_objects) - 1)

        return self._place_along_y(sorted_objects, first.y, gap)

    def _distribute_horizontal_on_wall(self, wall_width: float) -> list[PositionUpdate]:
        """Equal gaps across the whole wall width, margins included."""
        sorted_objects = sorted(self.objects, key=lambda o: o.x)
        total_width = sum(o.width for o in sorted_objects)
        gap = (wall_width - total_width) / (len(sorted_objects) + 1)

        return self._place_along_x(sorted_objects, gap, gap)

    def _distribute_vertical_on_wall(self, wall_height: float) -> list[PositionUpdate]:
        """Equal gaps across the whole wall height, margins included."""
        sorted_objects = sorted(self.objects, key=lambda o: o.y)
        total_height = sum(o.height for o in sorted_objects)
        gap = (wall_height - total_height) / (len(sorted_objects) + 1)

        return self._place_along_y(sorted_objects, gap, gap)

    @staticmethod
    def _place_along_x(
        sorted_objects: list[Positioned], start: float, gap: float
    ) -> list[PositionUpdate]:
        updates = []
        current_x = start
        for obj in sorted_objects:
            if obj.x != current_x:
                updates.append(PositionUpdate(id=obj.id, x=current_x, y=obj.y))
            current_x += obj.width + gap
        return updates

    @staticmethod
    def _place_along_y(
        sorted_objects: list[Positioned], start: float, gap: float
    ) -> list[PositionUpdate]:
        updates = []
        current_y = start
        for obj in sorted_objects:
            if obj.y != current_y:
                updates.append(PositionUpdate(id=obj.id, x=obj.x, y=current_y))
            current_y += obj.height + gap
        return updates


def align_frames(
    objects: Iterable[Positioned],
    selected_ids: Iterable[str],
    align_type: Union[AlignType, str],
    bounds: Optional[Bounds] = None,
) -> list[PositionUpdate]:
    """Align or distribute the selected objects.

    Args:
        objects: All objects on the wall, in store order.
        selected_ids: IDs of the objects to align.
        align_type: Operation, as an AlignType or its string value.
        bounds: Wall dimensions; required by the wall-centered distributes.

    Returns:
        Position updates for the objects that move.

    Raises:
        ValueError: If ``align_type`` is not a known operation.
    """
    align_type = AlignType(align_type)
    wanted = set(selected_ids)
    selected = [o for o in objects if o.id in wanted]

    updates = AlignmentConstraint(selected, align_type, bounds).apply()
    logger.debug(f"{align_type.value}: {len(selected)} selected, {len(updates)} moved")
    return updates


def apply_updates(
    objects: Iterable[Positioned],
    updates: Iterable[PositionUpdate],
) -> dict[str, tuple[float, float]]:
    """Resolve updates into final positions keyed by object id.

    Objects without an update keep their position. Updates for unknown ids
    are ignored.
    """
    positions = {o.id: (o.x, o.y) for o in objects}
    for update in updates:
        if update.id in positions:
            positions[update.id] = (update.x, update.y)
    return positions
