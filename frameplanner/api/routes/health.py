"""Health check routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from frameplanner.api.config import get_settings
from frameplanner.api.dependencies import get_store
from frameplanner.store.project import ProjectStore

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    version: str
    frames: int
    max_frames: int


@router.get("/health", response_model=HealthResponse)
async def health_check(store: ProjectStore = Depends(get_store)):
    """Service status with the size of the loaded project."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=get_settings().app_version,
        frames=len(store.state.frames),
        max_frames=store.max_frames,
    )
