"""Pytest configuration and fixtures."""

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient

from frameplanner.api.dependencies import get_store
from frameplanner.api.main import app
from frameplanner.dsl.schema import Frame, Wall
from frameplanner.store.project import ProjectStore


@dataclass
class Box:
    """Bare positioned object; allows degenerate sizes a Frame would reject."""

    id: str
    x: float
    y: float
    width: float
    height: float


def make_frame(frame_id: str, x: float, y: float, width: float, height: float) -> Frame:
    """Frame with default appearance at the given box."""
    return Frame(id=frame_id, x=x, y=y, width=width, height=height)


@pytest.fixture
def wall() -> Wall:
    """Default 300 x 250 cm wall."""
    return Wall(width=300, height=250)


@pytest.fixture
def row_of_frames() -> list[Frame]:
    """Three frames in a row with uneven gaps (x=10/60/120, widths 40/30/50)."""
    return [
        make_frame("a", 10, 20, 40, 30),
        make_frame("b", 60, 40, 30, 30),
        make_frame("c", 120, 30, 50, 30),
    ]


@pytest.fixture
def store() -> ProjectStore:
    """Fresh store with coalescing disabled so every action is one undo step."""
    return ProjectStore(checkpoint_window=0)


@pytest.fixture
def client(store: ProjectStore) -> TestClient:
    """Test client bound to a fresh project store."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
