"""
schemas.py - Pydantic request/response models for the API.

Keys are camelCase on the wire, matching the exported project format.
"""

from dataclasses import asdict
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from frameplanner.constraints.alignment import AlignType
from frameplanner.constraints.engine import DragResult
from frameplanner.dsl.schema import FrameShape, Unit, Wall
from frameplanner.engine.positioned import PositionUpdate, SnapTargets


class ApiModel(BaseModel):
    """Base for API models: camelCase aliases, accepts either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# SHARED MODELS
# =============================================================================

class FrameBox(ApiModel):
    """Bounding box of a frame as the engine sees it."""
    id: str
    x: float
    y: float
    width: float
    height: float


class SnapTargetSchema(ApiModel):
    position: float
    type: str


class SnapTargetsSchema(ApiModel):
    vertical: List[SnapTargetSchema]
    horizontal: List[SnapTargetSchema]

    @classmethod
    def from_targets(cls, targets: SnapTargets) -> "SnapTargetsSchema":
        return cls.model_validate(asdict(targets))


class SnapGuideSchema(ApiModel):
    orientation: str
    position: float
    type: str
    snap_offset: float


class SpacingSegmentSchema(ApiModel):
    start: float
    end: float
    cross: float


class SpacingGuideSchema(ApiModel):
    orientation: str
    gap: float
    segments: List[SpacingSegmentSchema]
    snap_offset: float


class PositionUpdateSchema(ApiModel):
    id: str
    x: float
    y: float


# =============================================================================
# REQUEST MODELS
# =============================================================================

class TargetsRequest(ApiModel):
    """Request for the snap targets of a wall."""
    frames: List[FrameBox] = Field(default_factory=list)
    wall: Wall
    exclude_id: Optional[str] = None


class SnapRequest(ApiModel):
    """Snap a dragged frame's raw position."""
    frames: List[FrameBox]
    wall: Wall
    moving_id: str
    x: float
    y: float
    threshold: Optional[float] = Field(
        None, gt=0, description="Snap distance in screen units; server default if omitted"
    )
    view_scale: float = Field(1.0, gt=0, description="Screen px per cm")


class SpacingRequest(ApiModel):
    """Find spacing guides for a moving frame."""
    frames: List[FrameBox] = Field(..., description="Stationary frames")
    moving: FrameBox
    threshold: Optional[float] = Field(
        None, description="Gap tolerance in cm; server default if omitted"
    )


class AlignRequest(ApiModel):
    """Align or distribute selected frames."""
    frames: List[FrameBox]
    selected_ids: List[str]
    operation: AlignType
    wall: Optional[Wall] = None


class AddFrameRequest(ApiModel):
    shape: FrameShape = FrameShape.RECT


class MoveFrameRequest(ApiModel):
    """Drag a stored frame to a raw position, snapping if enabled."""
    x: float
    y: float
    view_scale: float = Field(1.0, gt=0)


class ProjectAlignRequest(ApiModel):
    operation: AlignType
    selected_ids: Optional[List[str]] = None


class SelectRequest(ApiModel):
    frame_id: str
    multi: bool = False


class PatchModel(ApiModel):
    """Partial update: only fields sent are applied, unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class FrameUpdateRequest(PatchModel):
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    shape: Optional[FrameShape] = None
    frame_color: Optional[str] = None
    frame_width: Optional[float] = None
    mat_enabled: Optional[bool] = None
    mat_width: Optional[float] = None
    mat_color: Optional[str] = None
    image_id: Optional[str] = None
    label: Optional[str] = None
    hanging_offset: Optional[float] = None


class WallUpdateRequest(PatchModel):
    width: Optional[float] = None
    height: Optional[float] = None
    color: Optional[str] = None


class ProjectSettingsRequest(ApiModel):
    """Display and snapping settings; omitted fields are left unchanged."""
    unit: Optional[Unit] = None
    snap_enabled: Optional[bool] = None
    grid_enabled: Optional[bool] = None
    grid_spacing: Optional[float] = None
    drill_holes_visible: Optional[bool] = None


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class DragResultSchema(ApiModel):
    x: float
    y: float
    guides: List[SnapGuideSchema]
    spacing_guides: List[SpacingGuideSchema]

    @classmethod
    def from_result(cls, result: DragResult) -> "DragResultSchema":
        return cls.model_validate(asdict(result))


class AlignResponse(ApiModel):
    updates: List[PositionUpdateSchema]

    @classmethod
    def from_updates(cls, updates: List[PositionUpdate]) -> "AlignResponse":
        return cls(updates=[PositionUpdateSchema.model_validate(asdict(u)) for u in updates])


class HistoryResponse(ApiModel):
    changed: bool
    can_undo: bool
    can_redo: bool


class SelectionResponse(ApiModel):
    selected_ids: List[str]


def dump_guides(guides: List[Any], schema: type[ApiModel]) -> List[ApiModel]:
    """Convert engine dataclasses to their response schema."""
    return [schema.model_validate(asdict(g)) for g in guides]
