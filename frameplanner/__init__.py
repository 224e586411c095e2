"""Frame Planner - wall layout planning for picture frames."""

__version__ = "1.0.0"
