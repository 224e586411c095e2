"""HTTP API for the frame planner."""
