"""Container runtime models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Engine(str, Enum):
    """Supported container engines."""
    PODMAN = "podman"
    DOCKER = "docker"


class ContainerState(Enum):
    """Sandbox container state as observed through the engine."""
    ABSENT = "absent"
    STOPPED = "stopped"
    RUNNING = "running"


class UserConfig(BaseModel):
    """Sandbox user identity derived from image metadata."""
    name: str
    home: str
    work_dir: str = ""
    env: List[str] = Field(default_factory=list)
    uid: Optional[int] = None
    gid: Optional[int] = None

    @property
    def user_arg(self) -> str:
        """Value passed to the engine's --user flag."""
        if self.uid is None:
            return self.name
        if self.gid is None:
            return str(self.uid)
        return f"{self.uid}:{self.gid}"


class MountArg(BaseModel):
    """A single -v argument. An empty source means an anonymous volume."""
    target: str
    source: Optional[str] = None
    options: List[str] = Field(default_factory=list)

    def to_arg(self) -> str:
        """Render the mount in the engine's -v syntax."""
        if not self.source:
            return self.target
        parts = [self.source, self.target]
        if self.options:
            parts.append(",".join(self.options))
        return ":".join(parts)
