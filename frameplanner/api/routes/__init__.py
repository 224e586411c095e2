"""API routes for Frame Planner."""

from fastapi import APIRouter

from frameplanner.api.routes.health import router as health_router
from frameplanner.api.routes.layout import router as layout_router
from frameplanner.api.routes.project import router as project_router

# Main API router
api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(layout_router, prefix="/layout", tags=["Layout"])
api_router.include_router(project_router, prefix="/project", tags=["Project"])

__all__ = ["api_router"]
