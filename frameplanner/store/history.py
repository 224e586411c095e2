"""Undo/redo history over immutable project snapshots."""

import logging
import time
from collections import deque
from typing import Callable

from frameplanner.dsl.schema import ProjectState
from frameplanner.engine.units import CHECKPOINT_WINDOW_SECONDS, UNDO_LIMIT

logger = logging.getLogger(__name__)


class ProjectHistory:
    """Holds the current ProjectState and its undo/redo stacks.

    Every commit replaces the current snapshot. A commit arriving within
    ``checkpoint_window`` seconds of the last checkpoint does not create a new
    undo step, so a burst of drag updates undoes as one.
    """

    def __init__(
        self,
        initial: ProjectState | None = None,
        limit: int = UNDO_LIMIT,
        checkpoint_window: float = CHECKPOINT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the history.

        Args:
            initial: Starting snapshot; defaults to an empty project.
            limit: Maximum number of undo steps kept.
            checkpoint_window: Coalescing window in seconds.
            clock: Monotonic time source.
        """
        self._current = initial if initial is not None else ProjectState()
        self._past: deque[ProjectState] = deque(maxlen=limit)
        self._future: list[ProjectState] = []
        self._checkpoint_window = checkpoint_window
        self._clock = clock
        self._last_checkpoint: float | None = None

    @property
    def current(self) -> ProjectState:
        return self._current

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def commit(self, state: ProjectState) -> ProjectState:
        """Make ``state`` current, recording an undo checkpoint if due.

        Args:
            state: New snapshot.

        Returns:
            The new current snapshot.
        """
        if state == self._current:
            return self._current

        now = self._clock()
        if (
            self._last_checkpoint is None
            or now - self._last_checkpoint >= self._checkpoint_window
        ):
            self._past.append(self._current)
            self._last_checkpoint = now

        self._current = state
        self._future.clear()
        return self._current

    def undo(self) -> bool:
        """Step back one checkpoint. Returns False if there is none."""
        if not self._past:
            return False

        self._future.append(self._current)
        self._current = self._past.pop()
        self._last_checkpoint = None
        logger.info(f"Undo ({len(self._past)} step(s) left)")
        return True

    def redo(self) -> bool:
        """Re-apply the last undone checkpoint. Returns False if there is none."""
        if not self._future:
            return False

        self._past.append(self._current)
        self._current = self._future.pop()
        self._last_checkpoint = None
        logger.info(f"Redo ({len(self._future)} step(s) left)")
        return True

    def reset(self, state: ProjectState) -> None:
        """Replace the current snapshot and forget all history."""
        self._current = state
        self._past.clear()
        self._future.clear()
        self._last_checkpoint = None
