"""Command line interface for Airlock."""
