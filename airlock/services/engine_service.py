"""Container engine service for abstracting podman/docker CLI operations."""

import logging
import shutil
import subprocess
from typing import Optional, Sequence, Union

from ..models.container import Engine
from .exceptions import EngineDetectionError, EngineInvocationError

logger = logging.getLogger(__name__)

# Autodetection order when no engine is preferred
ENGINE_SEARCH_ORDER = (Engine.PODMAN, Engine.DOCKER)


def detect_engine(preferred: Optional[Union[Engine, str]] = None) -> Engine:
    """Resolve the container engine to use.

    Args:
        preferred: Engine requested by the project configuration, if any

    Returns:
        The engine whose binary was found on PATH

    Raises:
        EngineDetectionError: If the preferred engine, or any known engine
            when none is preferred, is not on PATH
    """
    if preferred:
        try:
            engine = Engine(preferred)
        except ValueError as e:
            raise EngineDetectionError(f"unknown container engine: {preferred}") from e
        if shutil.which(engine.value):
            return engine
        raise EngineDetectionError(f"preferred engine not found on PATH: {engine.value}")

    for engine in ENGINE_SEARCH_ORDER:
        if shutil.which(engine.value):
            logger.debug(f"Detected container engine: {engine.value}")
            return engine
    raise EngineDetectionError("neither podman nor docker found on PATH")


class EngineService:
    """Service for running engine commands with clean abstractions."""

    def __init__(self, engine: Engine):
        """Initialize engine service.

        Args:
            engine: The detected container engine
        """
        self.engine = engine

    @property
    def binary(self) -> str:
        """Name of the engine executable."""
        return self.engine.value

    @property
    def is_rootless_capable(self) -> bool:
        """Whether the engine supports keeping the host uid inside the container."""
        return self.engine == Engine.PODMAN

    def run(
        self, args: Sequence[str], capture: bool = False, check: bool = True
    ) -> subprocess.CompletedProcess:
        """Run an engine command.

        Without capture the child inherits stdin, stdout and stderr, which is
        what interactive shells and image builds need.

        Args:
            args: Engine arguments (excluding the executable)
            capture: Capture stdout and stderr as text
            check: Raise on non-zero exit status

        Returns:
            Completed process result

        Raises:
            EngineInvocationError: If the command fails to start, or exits
                non-zero while check is set
        """
        cmd = [self.binary] + list(args)
        logger.info("+ %s", " ".join(cmd))
        try:
            if capture:
                return subprocess.run(cmd, check=check, capture_output=True, text=True)
            return subprocess.run(cmd, check=check)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            message = f"'{' '.join(cmd)}' exited with status {e.returncode}"
            if stderr:
                message += f": {stderr.splitlines()[-1]}"
            raise EngineInvocationError(
                message, command=cmd, returncode=e.returncode, stderr=stderr
            ) from e
        except OSError as e:
            raise EngineInvocationError(
                f"failed to start '{self.binary}': {e}", command=cmd
            ) from e

    def output(self, args: Sequence[str]) -> str:
        """Run an engine command and return its stdout."""
        return self.run(args, capture=True).stdout

    def succeeds(self, args: Sequence[str]) -> bool:
        """Run an engine command quietly and report whether it exited zero."""
        return self.run(args, capture=True, check=False).returncode == 0
