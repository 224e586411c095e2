"""API middleware for Frame Planner."""

from frameplanner.api.middleware.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
