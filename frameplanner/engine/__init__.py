"""Units and the engine's input/output contract."""
