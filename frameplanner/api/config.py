"""
config.py - Environment configuration for the API.

Settings come from environment variables, optionally seeded from a .env file
at the repository root.
"""

import os
from functools import lru_cache
from pathlib import Path

from frameplanner import __version__
from frameplanner.engine.units import (
    CHECKPOINT_WINDOW_SECONDS,
    MAX_FRAMES,
    SNAP_THRESHOLD,
    UNDO_LIMIT,
)


# Load .env file if it exists
def _load_dotenv():
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key and value and key not in os.environ:
                        os.environ[key] = value

_load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.app_name: str = os.environ.get("APP_NAME", "Frame Planner")
        self.app_version: str = os.environ.get("APP_VERSION", __version__)

        # Server settings
        self.host: str = os.environ.get("HOST", "0.0.0.0")
        self.port: int = int(os.environ.get("PORT", "8000"))
        self.debug: bool = os.environ.get("DEBUG", "false").lower() == "true"
        self.api_prefix: str = os.environ.get("API_PREFIX", "/api/v1")
        self.log_level: str = os.environ.get("LOG_LEVEL", "INFO").upper()

        # CORS settings
        self.allowed_origins: list = os.environ.get(
            "CORS_ORIGINS",
            "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
        ).split(",")

        # Planner settings
        self.snap_threshold: float = float(os.environ.get("SNAP_THRESHOLD", str(SNAP_THRESHOLD)))
        self.max_frames: int = int(os.environ.get("MAX_FRAMES", str(MAX_FRAMES)))
        self.undo_limit: int = int(os.environ.get("UNDO_LIMIT", str(UNDO_LIMIT)))
        self.checkpoint_window_seconds: float = float(
            os.environ.get("CHECKPOINT_WINDOW_SECONDS", str(CHECKPOINT_WINDOW_SECONDS))
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
