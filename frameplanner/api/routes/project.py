"""Project routes: frames, wall, settings, alignment, history, export/import."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from frameplanner.api.dependencies import get_snap_engine, get_store
from frameplanner.api.schemas import (
    AddFrameRequest,
    AlignResponse,
    DragResultSchema,
    FrameUpdateRequest,
    HistoryResponse,
    MoveFrameRequest,
    ProjectAlignRequest,
    ProjectSettingsRequest,
    SelectionResponse,
    SelectRequest,
    WallUpdateRequest,
)
from frameplanner.dsl.schema import Frame, ProjectState, Wall
from frameplanner.services.export_import import (
    ProjectImportError,
    export_project,
    import_project,
)
from frameplanner.services.installation import installation_guide_text
from frameplanner.store.project import ProjectStore

router = APIRouter()


def _not_found(frame_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Frame {frame_id} not found",
    )


def _invalid(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=e.errors(include_url=False, include_context=False),
    )


def _history(store: ProjectStore, changed: bool) -> HistoryResponse:
    return HistoryResponse(
        changed=changed,
        can_undo=store.history.can_undo,
        can_redo=store.history.can_redo,
    )


@router.get("", response_model=ProjectState)
async def get_project(store: ProjectStore = Depends(get_store)):
    """Current project snapshot."""
    return store.state


# =============================================================================
# FRAMES
# =============================================================================

@router.post("/frames", response_model=Frame, status_code=status.HTTP_201_CREATED)
async def add_frame(
    request: AddFrameRequest,
    store: ProjectStore = Depends(get_store),
):
    """Add a default frame centered on the wall."""
    frame = store.add_frame(request.shape)
    if frame is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Frame limit of {store.max_frames} reached",
        )
    return frame


@router.patch("/frames/{frame_id}", response_model=Frame)
async def update_frame(
    frame_id: str,
    request: FrameUpdateRequest,
    store: ProjectStore = Depends(get_store),
):
    """Update fields of a frame."""
    try:
        frame = store.update_frame(frame_id, request.changes())
    except ValidationError as e:
        raise _invalid(e)
    if frame is None:
        raise _not_found(frame_id)
    return frame


@router.delete("/frames/{frame_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_frame(frame_id: str, store: ProjectStore = Depends(get_store)):
    """Remove a frame."""
    if not store.remove_frame(frame_id):
        raise _not_found(frame_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/frames/{frame_id}/duplicate",
    response_model=Frame,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_frame(frame_id: str, store: ProjectStore = Depends(get_store)):
    """Duplicate a frame with a small offset."""
    if store.state.get_frame(frame_id) is None:
        raise _not_found(frame_id)
    frame = store.duplicate_frame(frame_id)
    if frame is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Frame limit of {store.max_frames} reached",
        )
    return frame


@router.post("/frames/{frame_id}/move", response_model=DragResultSchema)
async def move_frame(
    frame_id: str,
    request: MoveFrameRequest,
    store: ProjectStore = Depends(get_store),
):
    """Drag a frame to a raw position; snaps when snapping is enabled."""
    state = store.state
    if state.get_frame(frame_id) is None:
        raise _not_found(frame_id)

    engine = get_snap_engine(state.wall.width, state.wall.height)
    result = engine.resolve_drag(
        state.frames,
        frame_id,
        request.x,
        request.y,
        view_scale=request.view_scale,
        snap_enabled=state.snap_enabled,
    )
    store.update_frame(frame_id, {"x": result.x, "y": result.y})
    return DragResultSchema.from_result(result)


@router.post("/select", response_model=SelectionResponse)
async def select_frame(request: SelectRequest, store: ProjectStore = Depends(get_store)):
    """Select a frame (add to the selection with ``multi``)."""
    if store.state.get_frame(request.frame_id) is None:
        raise _not_found(request.frame_id)
    store.select_frame(request.frame_id, multi=request.multi)
    return SelectionResponse(selected_ids=store.selected_ids)


@router.delete("/select", response_model=SelectionResponse)
async def deselect_all(store: ProjectStore = Depends(get_store)):
    store.deselect_all()
    return SelectionResponse(selected_ids=store.selected_ids)


@router.post("/align", response_model=AlignResponse)
async def align_selected(
    request: ProjectAlignRequest,
    store: ProjectStore = Depends(get_store),
):
    """Align the selection (or the given ids) and apply the result."""
    updates = store.align(request.operation, request.selected_ids)
    return AlignResponse.from_updates(updates)


# =============================================================================
# WALL
# =============================================================================

@router.patch("/wall", response_model=Wall)
async def update_wall(
    request: WallUpdateRequest,
    store: ProjectStore = Depends(get_store),
):
    """Update wall dimensions or color."""
    try:
        return store.set_wall(request.changes())
    except ValidationError as e:
        raise _invalid(e)


@router.patch("/settings", response_model=ProjectState)
async def update_settings(
    request: ProjectSettingsRequest,
    store: ProjectStore = Depends(get_store),
):
    """Change display unit, snapping, grid or drill-hole settings."""
    state = store.state
    if request.grid_spacing is not None:
        store.set_grid_spacing(request.grid_spacing)
    if request.unit is not None:
        store.set_unit(request.unit)
    if request.snap_enabled is not None and request.snap_enabled != state.snap_enabled:
        store.toggle_snap()
    if request.grid_enabled is not None and request.grid_enabled != state.grid_enabled:
        store.toggle_grid()
    if (
        request.drill_holes_visible is not None
        and request.drill_holes_visible != state.drill_holes_visible
    ):
        store.toggle_drill_holes()
    return store.state


# =============================================================================
# HISTORY
# =============================================================================

@router.post("/undo", response_model=HistoryResponse)
async def undo(store: ProjectStore = Depends(get_store)):
    return _history(store, store.undo())


@router.post("/redo", response_model=HistoryResponse)
async def redo(store: ProjectStore = Depends(get_store)):
    return _history(store, store.redo())


# =============================================================================
# EXPORT / IMPORT
# =============================================================================

@router.get("/export")
async def export(store: ProjectStore = Depends(get_store)):
    """Download the project as JSON."""
    return Response(
        content=export_project(store.state),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="frame-planner.json"'},
    )


@router.post("/import", response_model=ProjectState)
async def import_(
    request: Request,
    store: ProjectStore = Depends(get_store),
):
    """Replace the project with an exported file sent as the request body."""
    text = (await request.body()).decode("utf-8", errors="replace")
    try:
        project = import_project(text)
    except ProjectImportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    store.load(project.wall, project.frames)
    return store.state


@router.get("/installation-guide", response_class=PlainTextResponse)
async def installation_guide(store: ProjectStore = Depends(get_store)):
    """Plain-text drilling instructions in the project's display unit."""
    state = store.state
    return installation_guide_text(state.wall, state.frames, state.unit)
