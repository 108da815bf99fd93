"""Utilities for Airlock."""

from .config_manager import ConfigManager, merge_layers
from .path_finder import PathFinder, ProjectInspector
from .project_initializer import ProjectInitializer

__all__ = [
    'ConfigManager',
    'PathFinder',
    'ProjectInitializer',
    'ProjectInspector',
    'merge_layers',
]
