"""Core functionality for Airlock: sandbox planning and lifecycle."""
