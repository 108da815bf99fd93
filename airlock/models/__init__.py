"""Models for Airlock."""

from .config import (
    BuildSection,
    BuildSpec,
    ConfigLayer,
    MountSpec,
    ProjectConfig,
    UserSpec,
)
from .container import ContainerState, Engine, MountArg, UserConfig

__all__ = [
    'BuildSection',
    'BuildSpec',
    'ConfigLayer',
    'MountSpec',
    'ProjectConfig',
    'UserSpec',
    'ContainerState',
    'Engine',
    'MountArg',
    'UserConfig',
]
