"""Airlock CLI commands."""
