"""Bounding-box geometry shared by the snapping and spacing resolvers."""

from dataclasses import dataclass

from frameplanner.engine.positioned import ObjectEdges, Positioned


def edges_of(obj: Positioned) -> ObjectEdges:
    """Edge and center coordinates of an object's bounding box.

    Args:
        obj: Object with x, y, width and height.

    Returns:
        ObjectEdges with [left, center_x, right] and [top, center_y, bottom].
    """
    return ObjectEdges(
        vertical=[obj.x, obj.x + obj.width / 2, obj.x + obj.width],
        horizontal=[obj.y, obj.y + obj.height / 2, obj.y + obj.height],
    )


@dataclass
class Rect:
    """Edges of a bounding box, precomputed."""

    left: float
    right: float
    top: float
    bottom: float
    center_x: float
    center_y: float

    @classmethod
    def from_object(cls, obj: Positioned) -> "Rect":
        return cls(
            left=obj.x,
            right=obj.x + obj.width,
            top=obj.y,
            bottom=obj.y + obj.height,
            center_x=obj.x + obj.width / 2,
            center_y=obj.y + obj.height / 2,
        )
