"""Image metadata inspection."""

import json
import logging
import posixpath
from typing import Any, Dict, Optional

from ..models.config import UserSpec
from ..models.container import UserConfig
from ..services.engine_service import EngineService
from ..services.exceptions import MetadataParseError
from .constants import DEFAULT_USER, HOME_PARENT, ROOT_HOME

logger = logging.getLogger(__name__)


def derive_home(user: str) -> str:
    """Guess the home directory of an image user.

    ``root`` lives in /root, everyone else in /home/<user>. The image's
    passwd database is not consulted, so images with unusual home
    directories need an explicit ``user.home`` in the configuration.
    """
    name = user.split(":", 1)[0]
    if name == "root":
        return ROOT_HOME
    return posixpath.join(HOME_PARENT, name)


class ImageInspector:
    """Resolves the sandbox user identity from an image's metadata."""

    def __init__(self, engine_service: EngineService):
        """Initialize image inspector."""
        self.engine_service = engine_service

    def inspect(self, image: str) -> Dict[str, Any]:
        """Return the ``Config`` record of an image.

        Raises:
            EngineInvocationError: If the inspect command fails
            MetadataParseError: If the output is not the expected JSON shape
        """
        output = self.engine_service.output(["image", "inspect", "--format", "json", image])
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise MetadataParseError(f"failed to parse image inspect output for {image}: {e}") from e

        # podman prints an array of records; some docker versions print a bare record
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise MetadataParseError(f"unexpected image inspect output for {image}")
        if not data:
            raise MetadataParseError(f"no data returned from image inspect {image}")

        record = data[0]
        if not isinstance(record, dict) or not isinstance(record.get("Config"), dict):
            raise MetadataParseError(f"image inspect output for {image} has no Config record")
        return record["Config"]

    def resolve(self, image: str, user_spec: Optional[UserSpec] = None) -> UserConfig:
        """Resolve the sandbox user for an image.

        Args:
            image: Image reference to inspect
            user_spec: Explicit identity fields that override image metadata

        Returns:
            The resolved user identity, working directory and image env

        Raises:
            EngineInvocationError: If the inspect command fails
            MetadataParseError: If the output is not the expected shape
        """
        config = self.inspect(image)
        user = self._string_field(config, "User", image)
        work_dir = self._string_field(config, "WorkingDir", image)
        env = config.get("Env") or []
        if not isinstance(env, list) or not all(isinstance(item, str) for item in env):
            raise MetadataParseError(f"image {image} has a malformed Env list")

        if not user:
            user = DEFAULT_USER

        user_config = UserConfig(name=user, home=derive_home(user), work_dir=work_dir, env=env)
        if user_spec is not None:
            overrides = user_spec.model_dump(exclude_none=True)
            if "name" in overrides and "home" not in overrides:
                overrides["home"] = derive_home(overrides["name"])
            user_config = user_config.model_copy(update=overrides)

        logger.debug(f"Resolved sandbox user {user_config.user_arg} (home {user_config.home}) for {image}")
        return user_config

    @staticmethod
    def _string_field(config: Dict[str, Any], key: str, image: str) -> str:
        value = config.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise MetadataParseError(f"image {image} has a malformed {key} field")
        return value
