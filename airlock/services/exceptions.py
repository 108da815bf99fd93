"""Custom exceptions for Airlock."""

from typing import Optional, Sequence


class AirlockError(Exception):
    """Base exception for all Airlock errors."""

    pass


class ConfigError(AirlockError):
    """Exception raised when a project configuration cannot be loaded."""

    pass


class ConfigNotFoundError(ConfigError):
    """Exception raised when a configuration file does not exist."""

    pass


class ConfigParseError(ConfigError):
    """Exception raised when a configuration file is malformed."""

    pass


class ConfigValidationError(ConfigError):
    """Exception raised when a configuration is structurally invalid."""

    pass


class EngineError(AirlockError):
    """Exception raised for container engine operations."""

    pass


class EngineDetectionError(EngineError):
    """Exception raised when no usable container engine is found."""

    pass


class EngineInvocationError(EngineError):
    """Exception raised when an engine command fails or cannot start."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        super().__init__(message)
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr


class MetadataParseError(EngineError):
    """Exception raised when engine inspection output has an unexpected shape."""

    pass
