"""
positioned.py - The contract between the layout engine and its callers.

The engine reads objects that satisfy ``Positioned`` and returns the
dataclasses below. Renderers draw guides from them; the project store
applies ``PositionUpdate`` deltas. Nothing here is persisted.

All coordinates are in CENTIMETRES, origin at the wall's top-left corner.
"""

from dataclasses import dataclass, field
from typing import List, Literal, Protocol

TargetType = Literal["edge", "center"]
Orientation = Literal["V", "H"]


class Positioned(Protocol):
    """Anything placed on the wall by its bounding box."""

    id: str
    x: float
    y: float
    width: float
    height: float


class Bounds(Protocol):
    """The bounding space (wall) objects live in."""

    width: float
    height: float


@dataclass
class SnapTarget:
    """A candidate alignment coordinate on one axis."""
    position: float
    type: TargetType


@dataclass
class SnapTargets:
    """Candidate targets split by axis.

    ``vertical`` holds x-coordinates (drawn as vertical lines),
    ``horizontal`` holds y-coordinates.
    """
    vertical: List[SnapTarget] = field(default_factory=list)
    horizontal: List[SnapTarget] = field(default_factory=list)


@dataclass
class ObjectEdges:
    """Edge and center coordinates of a bounding box.

    vertical = [left, center_x, right]; horizontal = [top, center_y, bottom].
    """
    vertical: List[float]
    horizontal: List[float]


@dataclass
class SnapGuide:
    """Best single-axis snap for a moving object.

    ``snap_offset`` is added to the moving object's raw x (orientation V)
    or y (orientation H) to put the matched edge exactly on ``position``.
    """
    orientation: Orientation
    position: float
    type: TargetType
    snap_offset: float


@dataclass
class SpacingSegment:
    """A gap indicator from ``start`` to ``end`` along the guide's axis.

    ``cross`` is the coordinate on the other axis where the tick is drawn.
    """
    start: float
    end: float
    cross: float

    @property
    def length(self) -> float:
        return self.end - self.start


@dataclass
class SpacingGuide:
    """A moving object continuing an existing gap between two neighbours.

    Orientation H means the gap runs along x, V means along y.
    """
    orientation: Orientation
    gap: float
    segments: List[SpacingSegment]
    snap_offset: float


@dataclass
class PositionUpdate:
    """New top-left position for one object. Applied by id."""
    id: str
    x: float
    y: float
