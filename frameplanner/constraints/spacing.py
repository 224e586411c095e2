"""Equal-gap spacing guides for dragged frames.

When two stationary frames already sit a gap apart, a frame dragged so that
it would continue that gap (on either side of the pair) gets a guide and the
offset that makes the new gap exact.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from frameplanner.constraints.geometry import Rect
from frameplanner.engine.positioned import Positioned, SpacingGuide, SpacingSegment

logger = logging.getLogger(__name__)


@dataclass
class _Gap:
    """A positive gap between two neighbours, ``before`` then ``after``."""

    gap: float
    before: Rect
    after: Rect


def _gaps_along_x(rects: list[Rect]) -> list[_Gap]:
    ordered = sorted(rects, key=lambda r: r.left)
    gaps = []
    for prev, nxt in zip(ordered, ordered[1:]):
        gap = nxt.left - prev.right
        if gap > 0:
            gaps.append(_Gap(gap=gap, before=prev, after=nxt))
    return gaps


def _gaps_along_y(rects: list[Rect]) -> list[_Gap]:
    ordered = sorted(rects, key=lambda r: r.top)
    gaps = []
    for prev, nxt in zip(ordered, ordered[1:]):
        gap = nxt.top - prev.bottom
        if gap > 0:
            gaps.append(_Gap(gap=gap, before=prev, after=nxt))
    return gaps


def _horizontal_guides(
    gaps: list[_Gap],
    moving: Rect,
    moving_obj: Positioned,
    threshold: float,
) -> list[SpacingGuide]:
    guides = []

    for g in gaps:
        existing = SpacingSegment(
            start=g.before.right,
            end=g.after.left,
            cross=(g.before.center_y + g.after.center_y) / 2,
        )

        # Moving frame to the right of the left-hand neighbour
        gap_after = moving.left - g.before.right
        if abs(gap_after - g.gap) < threshold and gap_after > 0:
            snap_to = g.before.right + g.gap
            guides.append(SpacingGuide(
                orientation="H",
                gap=g.gap,
                segments=[
                    existing,
                    SpacingSegment(
                        start=g.before.right,
                        end=snap_to,
                        cross=(moving.center_y + g.before.center_y) / 2,
                    ),
                ],
                snap_offset=snap_to - moving.left,
            ))

        # Moving frame to the left of the right-hand neighbour
        gap_before = g.after.left - moving.right
        if abs(gap_before - g.gap) < threshold and gap_before > 0:
            snap_to = g.after.left - g.gap - moving_obj.width
            guides.append(SpacingGuide(
                orientation="H",
                gap=g.gap,
                segments=[
                    existing,
                    SpacingSegment(
                        start=snap_to + moving_obj.width,
                        end=g.after.left,
                        cross=(moving.center_y + g.after.center_y) / 2,
                    ),
                ],
                snap_offset=snap_to - moving_obj.x,
            ))

    return guides


def _vertical_guides(
    gaps: list[_Gap],
    moving: Rect,
    moving_obj: Positioned,
    threshold: float,
) -> list[SpacingGuide]:
    guides = []

    for g in gaps:
        existing = SpacingSegment(
            start=g.before.bottom,
            end=g.after.top,
            cross=(g.before.center_x + g.after.center_x) / 2,
        )

        # Moving frame below the upper neighbour
        gap_after = moving.top - g.before.bottom
        if abs(gap_after - g.gap) < threshold and gap_after > 0:
            snap_to = g.before.bottom + g.gap
            guides.append(SpacingGuide(
                orientation="V",
                gap=g.gap,
                segments=[
                    existing,
                    SpacingSegment(
                        start=g.before.bottom,
                        end=snap_to,
                        cross=(moving.center_x + g.before.center_x) / 2,
                    ),
                ],
                snap_offset=snap_to - moving.top,
            ))

        # Moving frame above the lower neighbour
        gap_before = g.after.top - moving.bottom
        if abs(gap_before - g.gap) < threshold and gap_before > 0:
            snap_to = g.after.top - g.gap - moving_obj.height
            guides.append(SpacingGuide(
                orientation="V",
                gap=g.gap,
                segments=[
                    existing,
                    SpacingSegment(
                        start=snap_to + moving_obj.height,
                        end=g.after.top,
                        cross=(moving.center_x + g.after.center_x) / 2,
                    ),
                ],
                snap_offset=snap_to - moving_obj.y,
            ))

    return guides


def find_spacing_guides(
    other_objects: Sequence[Positioned],
    moving_object: Positioned,
    threshold: float,
) -> list[SpacingGuide]:
    """Find every gap the moving object could continue.

    Args:
        other_objects: Stationary objects (the moving one excluded).
        moving_object: Object being dragged, at its raw position.
        threshold: Maximum difference between the new and existing gap.

    Returns:
        Horizontal-gap guides (orientation H) followed by vertical-gap
        guides (orientation V). Several per axis are possible.
    """
    if len(other_objects) < 1:
        return []

    moving = Rect.from_object(moving_object)
    others = [Rect.from_object(o) for o in other_objects]

    guides = _horizontal_guides(_gaps_along_x(others), moving, moving_object, threshold)
    guides.extend(_vertical_guides(_gaps_along_y(others), moving, moving_object, threshold))

    if guides:
        logger.debug(f"Spacing guides: {len(guides)} match(es)")

    return guides
