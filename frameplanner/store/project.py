"""Project store: frame/wall actions producing new snapshots."""

import logging
import uuid
from typing import Any, Iterable, Mapping, Optional

from frameplanner.constraints.alignment import AlignType, align_frames, apply_updates
from frameplanner.dsl.schema import Frame, FrameShape, ProjectState, Unit, Wall
from frameplanner.engine.positioned import PositionUpdate
from frameplanner.engine.units import (
    CHECKPOINT_WINDOW_SECONDS,
    DEFAULT_FRAME_HEIGHT,
    DEFAULT_FRAME_WIDTH,
    DUPLICATE_OFFSET_CM,
    MAX_FRAMES,
    UNDO_LIMIT,
    ZOOM_MAX,
    ZOOM_MIN,
    clamp,
)
from frameplanner.store.history import ProjectHistory

logger = logging.getLogger(__name__)


def new_frame_id() -> str:
    """Generate a unique frame ID."""
    return str(uuid.uuid4())


class ProjectStore:
    """The editable project.

    Document state goes through ``ProjectHistory`` and is undoable.
    Selection and zoom are view state and are not.
    """

    def __init__(
        self,
        initial: ProjectState | None = None,
        max_frames: int = MAX_FRAMES,
        undo_limit: int = UNDO_LIMIT,
        checkpoint_window: float = CHECKPOINT_WINDOW_SECONDS,
        history: ProjectHistory | None = None,
    ) -> None:
        self.history = history or ProjectHistory(
            initial, limit=undo_limit, checkpoint_window=checkpoint_window
        )
        self.max_frames = max_frames
        self.selected_ids: list[str] = []
        self.zoom_level: float = 1.0

    @property
    def state(self) -> ProjectState:
        return self.history.current

    def _commit(self, **changes: Any) -> ProjectState:
        return self.history.commit(self.state.model_copy(update=changes))

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def add_frame(self, shape: FrameShape | str = FrameShape.RECT) -> Optional[Frame]:
        """Add a default-sized frame centered on the wall.

        Returns:
            The new frame, or None if the frame limit is reached.
        """
        if len(self.state.frames) >= self.max_frames:
            logger.warning(f"Frame limit of {self.max_frames} reached")
            return None

        wall = self.state.wall
        frame = Frame(
            id=new_frame_id(),
            shape=FrameShape(shape),
            x=(wall.width - DEFAULT_FRAME_WIDTH) / 2,
            y=(wall.height - DEFAULT_FRAME_HEIGHT) / 2,
        )
        self._commit(frames=self.state.frames + (frame,))
        logger.info(f"Added {frame.shape.value} frame {frame.id}")
        return frame

    def remove_frame(self, frame_id: str) -> bool:
        """Remove a frame and drop it from the selection."""
        frames = tuple(f for f in self.state.frames if f.id != frame_id)
        if len(frames) == len(self.state.frames):
            return False

        self._commit(frames=frames)
        self.selected_ids = [fid for fid in self.selected_ids if fid != frame_id]
        logger.info(f"Removed frame {frame_id}")
        return True

    def update_frame(self, frame_id: str, changes: Mapping[str, Any]) -> Optional[Frame]:
        """Update fields of a frame. The id itself cannot be changed.

        Raises:
            pydantic.ValidationError: If the changes produce an invalid frame.

        Returns:
            The updated frame, or None if no frame has this ID.
        """
        frame = self.state.get_frame(frame_id)
        if frame is None:
            return None

        fields = {k: v for k, v in changes.items() if k != "id"}
        updated = Frame.model_validate({**frame.model_dump(), **fields})
        self._commit(frames=tuple(
            updated if f.id == frame_id else f for f in self.state.frames
        ))
        return updated

    def duplicate_frame(self, frame_id: str) -> Optional[Frame]:
        """Copy a frame with a small offset. None if missing or at the limit."""
        source = self.state.get_frame(frame_id)
        if source is None:
            return None
        if len(self.state.frames) >= self.max_frames:
            logger.warning(f"Frame limit of {self.max_frames} reached")
            return None

        duplicate = source.model_copy(update={
            "id": new_frame_id(),
            "x": source.x + DUPLICATE_OFFSET_CM,
            "y": source.y + DUPLICATE_OFFSET_CM,
        })
        self._commit(frames=self.state.frames + (duplicate,))
        return duplicate

    def apply_updates(self, updates: Iterable[PositionUpdate]) -> ProjectState:
        """Move frames to the positions in ``updates``."""
        positions = apply_updates(self.state.frames, updates)
        frames = tuple(f.moved_to(*positions[f.id]) for f in self.state.frames)
        return self._commit(frames=frames)

    def align(
        self,
        align_type: AlignType | str,
        selected_ids: Iterable[str] | None = None,
    ) -> list[PositionUpdate]:
        """Align the selection (or the given ids) and apply the result.

        Returns:
            The updates that were applied.
        """
        ids = list(selected_ids) if selected_ids is not None else self.selected_ids
        updates = align_frames(self.state.frames, ids, align_type, self.state.wall)
        if updates:
            self.apply_updates(updates)
        return updates

    # ------------------------------------------------------------------
    # Wall and settings
    # ------------------------------------------------------------------

    def set_wall(self, changes: Mapping[str, Any]) -> Wall:
        """Update wall fields (width, height, color)."""
        wall = Wall.model_validate({**self.state.wall.model_dump(), **changes})
        self._commit(wall=wall)
        return wall

    def set_unit(self, unit: Unit | str) -> None:
        self._commit(unit=Unit(unit))

    def toggle_snap(self) -> bool:
        return self._commit(snap_enabled=not self.state.snap_enabled).snap_enabled

    def toggle_grid(self) -> bool:
        return self._commit(grid_enabled=not self.state.grid_enabled).grid_enabled

    def set_grid_spacing(self, spacing: float) -> None:
        if spacing <= 0:
            raise ValueError(f"Grid spacing must be positive, got {spacing}")
        self._commit(grid_spacing=spacing)

    def toggle_drill_holes(self) -> bool:
        state = self._commit(drill_holes_visible=not self.state.drill_holes_visible)
        return state.drill_holes_visible

    def load(self, wall: Wall, frames: Iterable[Frame]) -> None:
        """Replace the project contents as an undoable step."""
        self._commit(wall=wall, frames=tuple(frames))
        self.selected_ids = []
        logger.info(f"Loaded project with {len(self.state.frames)} frame(s)")

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------

    def select_frame(self, frame_id: str, multi: bool = False) -> None:
        """Select a frame, adding to the selection when ``multi`` is set."""
        if multi:
            if frame_id not in self.selected_ids:
                self.selected_ids.append(frame_id)
        else:
            self.selected_ids = [frame_id]

    def deselect_all(self) -> None:
        self.selected_ids = []

    def set_zoom_level(self, level: float) -> float:
        self.zoom_level = clamp(level, ZOOM_MIN, ZOOM_MAX)
        return self.zoom_level

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()
