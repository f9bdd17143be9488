"""Infrastructure layer: persistence and runtime services."""
