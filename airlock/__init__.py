"""Airlock - Persistent per-project development sandboxes on Podman or Docker."""

__version__ = "0.5.0"
