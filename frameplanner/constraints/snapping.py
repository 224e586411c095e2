"""Snap targets and single-axis snap guides for dragged frames."""

import logging
import math
from typing import Iterable, Optional

from frameplanner.engine.positioned import (
    ObjectEdges,
    Orientation,
    Positioned,
    SnapGuide,
    SnapTarget,
    SnapTargets,
)

logger = logging.getLogger(__name__)


def get_snap_targets(
    objects: Iterable[Positioned],
    wall_width: float,
    wall_height: float,
    exclude_id: Optional[str] = None,
) -> SnapTargets:
    """Collect every coordinate a moving object may snap to.

    Wall edges and center come first, then each object's edges and center
    in input order. Duplicates are kept.

    Args:
        objects: Objects on the wall.
        wall_width: Wall width in cm.
        wall_height: Wall height in cm.
        exclude_id: Object to leave out (usually the one being dragged).

    Returns:
        SnapTargets with x-coordinates in ``vertical`` and y in ``horizontal``.
    """
    vertical = [
        SnapTarget(position=0, type="edge"),
        SnapTarget(position=wall_width, type="edge"),
        SnapTarget(position=wall_width / 2, type="center"),
    ]
    horizontal = [
        SnapTarget(position=0, type="edge"),
        SnapTarget(position=wall_height, type="edge"),
        SnapTarget(position=wall_height / 2, type="center"),
    ]

    for obj in objects:
        if exclude_id is not None and obj.id == exclude_id:
            continue

        vertical.extend([
            SnapTarget(position=obj.x, type="edge"),
            SnapTarget(position=obj.x + obj.width, type="edge"),
            SnapTarget(position=obj.x + obj.width / 2, type="center"),
        ])
        horizontal.extend([
            SnapTarget(position=obj.y, type="edge"),
            SnapTarget(position=obj.y + obj.height, type="edge"),
            SnapTarget(position=obj.y + obj.height / 2, type="center"),
        ])

    return SnapTargets(vertical=vertical, horizontal=horizontal)


def _best_on_axis(
    orientation: Orientation,
    edges: list[float],
    targets: list[SnapTarget],
    threshold: float,
) -> Optional[SnapGuide]:
    """Closest (edge, target) pair on one axis, or None if none is in range.

    Comparison is strict, so on equal distances the first pair seen wins.
    """
    best: Optional[SnapGuide] = None
    best_dist = math.inf

    for edge in edges:
        for target in targets:
            dist = abs(edge - target.position)
            if dist < threshold and dist < best_dist:
                best_dist = dist
                best = SnapGuide(
                    orientation=orientation,
                    position=target.position,
                    type=target.type,
                    snap_offset=target.position - edge,
                )

    return best


def find_snap_guides(
    targets: SnapTargets,
    edges: ObjectEdges,
    threshold: float,
) -> list[SnapGuide]:
    """Find at most one vertical and one horizontal snap guide.

    Args:
        targets: Candidate targets (see ``get_snap_targets``).
        edges: Edges of the moving object (see ``edges_of``).
        threshold: Snap distance in cm; matches must be strictly closer.

    Returns:
        Zero, one or two guides, vertical first.
    """
    guides = []

    best_v = _best_on_axis("V", edges.vertical, targets.vertical, threshold)
    if best_v is not None:
        guides.append(best_v)

    best_h = _best_on_axis("H", edges.horizontal, targets.horizontal, threshold)
    if best_h is not None:
        guides.append(best_h)

    if guides:
        logger.debug(f"Snap guides: {guides}")

    return guides
