"""Service layer for abstracting container engine operations."""

from .engine_service import Engine, EngineService, detect_engine
from .exceptions import (
    AirlockError,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    EngineError,
    EngineDetectionError,
    EngineInvocationError,
    MetadataParseError,
)

__all__ = [
    "Engine",
    "EngineService",
    "detect_engine",
    "AirlockError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "EngineError",
    "EngineDetectionError",
    "EngineInvocationError",
    "MetadataParseError",
]
