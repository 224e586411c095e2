"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from frameplanner.api.config import get_settings
from frameplanner.api.middleware import LoggingMiddleware
from frameplanner.api.routes import api_router

settings = get_settings()
logger = logging.getLogger("frameplanner.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log the planner configuration on startup and shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(
        f"Snap threshold {settings.snap_threshold}, max {settings.max_frames} frames, "
        f"{settings.undo_limit} undo steps"
    )

    yield

    logger.info("Shutting down...")


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Model validation failures inside a handler are unprocessable input."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors(include_url=False, include_context=False)},
    )


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Domain ValueErrors such as a non-positive grid spacing become 400s."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Wall layout planner for picture frames",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware, exclude_paths=["/health"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Looked up by MRO, so ValidationError (a ValueError) keeps its own handler
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Liveness probe outside the API prefix."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "frameplanner.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
