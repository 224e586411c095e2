"""Stateless layout routes: snap targets, drag snapping, spacing, alignment."""

from fastapi import APIRouter

from frameplanner.api.config import get_settings
from frameplanner.api.dependencies import get_snap_engine
from frameplanner.api.schemas import (
    AlignRequest,
    AlignResponse,
    DragResultSchema,
    SnapRequest,
    SnapTargetsSchema,
    SpacingGuideSchema,
    SpacingRequest,
    TargetsRequest,
    dump_guides,
)
from frameplanner.constraints.alignment import align_frames
from frameplanner.constraints.snapping import get_snap_targets
from frameplanner.constraints.spacing import find_spacing_guides

router = APIRouter()


@router.post("/targets", response_model=SnapTargetsSchema)
async def snap_targets(request: TargetsRequest):
    """Snap targets of a wall and its frames."""
    targets = get_snap_targets(
        request.frames, request.wall.width, request.wall.height, request.exclude_id
    )
    return SnapTargetsSchema.from_targets(targets)


@router.post("/snap", response_model=DragResultSchema)
async def snap(request: SnapRequest):
    """Snap a dragged frame and return the guides to draw."""
    engine = get_snap_engine(request.wall.width, request.wall.height)
    if request.threshold is not None:
        engine.snap_threshold = request.threshold

    result = engine.resolve_drag(
        request.frames,
        request.moving_id,
        request.x,
        request.y,
        view_scale=request.view_scale,
    )
    return DragResultSchema.from_result(result)


@router.post("/spacing", response_model=list[SpacingGuideSchema])
async def spacing(request: SpacingRequest):
    """Equal-gap guides for a moving frame."""
    threshold = request.threshold
    if threshold is None:
        threshold = get_settings().snap_threshold
    guides = find_spacing_guides(request.frames, request.moving, threshold)
    return dump_guides(guides, SpacingGuideSchema)


@router.post("/align", response_model=AlignResponse)
async def align(request: AlignRequest):
    """Align or distribute the selected frames."""
    updates = align_frames(
        request.frames, request.selected_ids, request.operation, request.wall
    )
    return AlignResponse.from_updates(updates)


@router.get("/settings")
async def layout_settings() -> dict[str, float]:
    """Engine settings clients need for drag feedback."""
    settings = get_settings()
    return {
        "snapThreshold": settings.snap_threshold,
        "maxFrames": settings.max_frames,
    }
