"""Pydantic v2 models for the wall/frame scene.

All measurements are in centimetres. Field names are snake_case in Python and
camelCase on the wire, so exported projects keep their original key names.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from frameplanner.engine.units import (
    DEFAULT_FRAME_BORDER,
    DEFAULT_FRAME_COLOR,
    DEFAULT_FRAME_HEIGHT,
    DEFAULT_FRAME_WIDTH,
    DEFAULT_GRID_SPACING,
    DEFAULT_HANGING_OFFSET,
    DEFAULT_MAT_COLOR,
    DEFAULT_MAT_WIDTH,
    DEFAULT_WALL_COLOR,
    DEFAULT_WALL_HEIGHT,
    DEFAULT_WALL_WIDTH,
)


class FrameShape(str, Enum):
    """Supported frame outlines. Ellipses use their bounding box for layout."""

    RECT = "rect"
    ELLIPSE = "ellipse"


class Unit(str, Enum):
    """Display units."""

    CM = "cm"
    INCH = "in"


class SceneModel(BaseModel):
    """Base for scene models: frozen, camelCase aliases, accepts either name."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# Geometry Models
# ============================================================================


class Wall(SceneModel):
    """The wall frames are hung on. Origin is its top-left corner."""

    width: float = Field(default=DEFAULT_WALL_WIDTH, gt=0, description="Width in cm")
    height: float = Field(default=DEFAULT_WALL_HEIGHT, gt=0, description="Height in cm")
    color: str = Field(default=DEFAULT_WALL_COLOR, description="RGB hex color")


class Frame(SceneModel):
    """A picture frame placed on the wall."""

    id: str = Field(description="Unique frame identifier")
    x: float = Field(description="Left position in cm")
    y: float = Field(description="Top position in cm")
    width: float = Field(default=DEFAULT_FRAME_WIDTH, gt=0, description="Width in cm")
    height: float = Field(default=DEFAULT_FRAME_HEIGHT, gt=0, description="Height in cm")
    shape: FrameShape = FrameShape.RECT

    # Appearance
    frame_color: str = Field(default=DEFAULT_FRAME_COLOR, description="Border color")
    frame_width: float = Field(default=DEFAULT_FRAME_BORDER, ge=0, description="Border width in cm")
    mat_enabled: bool = False
    mat_width: float = Field(default=DEFAULT_MAT_WIDTH, ge=0, description="Mat width in cm")
    mat_color: str = Field(default=DEFAULT_MAT_COLOR)
    image_id: Optional[str] = Field(default=None, description="Key of the stored image blob")
    label: str = ""

    # Distance from the top edge down to the hanging point
    hanging_offset: float = Field(default=DEFAULT_HANGING_OFFSET, ge=0)

    @property
    def right(self) -> float:
        """Right edge position."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge position."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        """Horizontal center."""
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        """Vertical center."""
        return self.y + self.height / 2

    def moved_to(self, x: float, y: float) -> "Frame":
        """Return a copy of this frame at a new position."""
        return self.model_copy(update={"x": x, "y": y})


class ProjectState(SceneModel):
    """One immutable version of the whole project.

    Selection, zoom and view mode are view state and live outside it.
    """

    wall: Wall = Field(default_factory=Wall)
    frames: tuple[Frame, ...] = ()
    unit: Unit = Unit.CM
    snap_enabled: bool = True
    grid_enabled: bool = False
    grid_spacing: float = Field(default=DEFAULT_GRID_SPACING, gt=0)
    drill_holes_visible: bool = False

    def get_frame(self, frame_id: str) -> Optional[Frame]:
        """Find a frame by its ID."""
        for frame in self.frames:
            if frame.id == frame_id:
                return frame
        return None
