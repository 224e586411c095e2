"""Request logging middleware."""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("frameplanner.api")

# Called on every pointer move while dragging
DRAG_PATHS = ("/layout/snap", "/layout/spacing")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with a short id, status and timing.

    Drag feedback endpoints log at DEBUG so a drag does not flood the log;
    failures on them are still reported at WARNING or ERROR.
    """

    def __init__(
        self,
        app,
        exclude_paths: list[str] | None = None,
        drag_paths: tuple[str, ...] = DRAG_PATHS,
    ):
        super().__init__(app)
        self.exclude_paths = exclude_paths or ["/health"]
        self.drag_paths = drag_paths

    def _success_level(self, path: str) -> int:
        if path.endswith(self.drag_paths):
            return logging.DEBUG
        return logging.INFO

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if any(path.startswith(p) for p in self.exclude_paths):
            return await call_next(request)

        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        label = f"[{request_id}] {request.method} {path}"
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            logger.exception(f"{label} failed after {elapsed:.1f}ms")
            raise

        elapsed = (time.perf_counter() - start) * 1000
        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = self._success_level(path)

        logger.log(level, f"{label} -> {status} ({elapsed:.1f}ms)")
        response.headers["X-Request-ID"] = request_id
        return response
