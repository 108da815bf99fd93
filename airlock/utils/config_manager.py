"""Configuration management utilities."""

import logging
import os
import posixpath
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from ..core.constants import (
    CONTAINERFILE_NAME,
    DATA_DIR_NAME,
    DEFAULT_CACHE_DIR,
    DEFAULT_HOME_DIR,
    DEFAULT_IMAGE,
    KEEPALIVE_COMMAND,
    LOCAL_CONFIG_FILE_NAME,
)
from ..models.config import (
    BuildSection,
    BuildSpec,
    ConfigLayer,
    MountSpec,
    ProjectConfig,
    default_image_tag,
)
from ..services.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from .path_finder import PathFinder, ProjectInspector

logger = logging.getLogger(__name__)


def _one_line(text: str) -> str:
    return " ".join(str(text).split())


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def merge_layers(base: ConfigLayer, override: ConfigLayer) -> ConfigLayer:
    """Merge an override layer over a base layer.

    Fields present in the override replace the base value, except ``env``,
    which merges key by key with override values winning. Sequences and
    sections (``mounts``, ``build``, ``user``, ``command``) are replaced
    wholesale.
    """
    merged = {field: getattr(base, field) for field in base.model_fields_set}
    for field in override.model_fields_set:
        value = getattr(override, field)
        if field == "env" and "env" in merged:
            value = {**merged["env"], **value}
        merged[field] = value
    return ConfigLayer.model_validate(merged)


class ConfigManager:
    """Loads a project's layered configuration and applies defaults."""

    def __init__(self, config_path: Union[str, Path], inspector: Optional[ProjectInspector] = None):
        """Initialize config manager.

        Args:
            config_path: Path to the base configuration file
            inspector: Project root inspector used for default image
                selection; defaults to one rooted at the resolved project
                directory
        """
        self.config_path = Path(os.path.abspath(config_path))
        self.config_dir = self.config_path.parent
        self.local_config_file = self.config_dir / DATA_DIR_NAME / LOCAL_CONFIG_FILE_NAME
        self.inspector = inspector

    @classmethod
    def locate(cls, config_path: Optional[Union[str, Path]] = None,
               directory: Optional[Union[str, Path]] = None) -> "ConfigManager":
        """Create a manager for an explicit path or the config found in a directory.

        Raises:
            ConfigNotFoundError: If no path is given and none is found
        """
        if config_path is None:
            config_path = PathFinder.find_config_file(directory)
            if config_path is None:
                raise ConfigNotFoundError("no airlock.yaml found")
        return cls(config_path)

    @staticmethod
    def read_layer(path: Path) -> ConfigLayer:
        """Read and validate a single configuration file.

        Raises:
            ConfigNotFoundError: If the file does not exist
            ConfigParseError: If the file is unreadable, not YAML, or does
                not match the configuration schema
        """
        try:
            text = path.read_text()
        except FileNotFoundError as e:
            raise ConfigNotFoundError(f"config file not found: {path}") from e
        except OSError as e:
            raise ConfigParseError(f"failed to read {path}: {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"failed to parse {path}: {_one_line(e)}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigParseError(f"failed to parse {path}: top level must be a mapping")

        try:
            return ConfigLayer.model_validate(data)
        except ValidationError as e:
            raise ConfigParseError(
                f"invalid config {path}: {_describe_validation_error(e)}"
            ) from e

    def load(self) -> ProjectConfig:
        """Load the base file, merge the local override and apply defaults."""
        layer = self.read_layer(self.config_path)
        if self.local_config_file.exists():
            local = self.read_layer(self.local_config_file)
            layer = merge_layers(layer, local)
            logger.debug(f"Merged local overrides from {self.local_config_file}")
        return self.resolve(layer)

    def resolve(self, layer: ConfigLayer) -> ProjectConfig:
        """Apply defaults to a merged layer.

        Raises:
            ConfigValidationError: If both image and build are set, or the
                result is otherwise inconsistent
        """
        if layer.image and layer.build is not None:
            raise ConfigValidationError("only one of image or build can be configured")

        project_dir = self.config_dir
        if layer.project_dir:
            project_dir = PathFinder.resolve_host_path(self.config_dir, layer.project_dir)

        name = layer.name or self.config_dir.name
        if not name:
            raise ConfigValidationError("name is required")

        work_dir = layer.work_dir or None
        if work_dir is not None:
            if not posixpath.isabs(work_dir):
                raise ConfigValidationError(
                    f"workdir must be an absolute path inside the sandbox: {work_dir}"
                )
            work_dir = posixpath.normpath(work_dir)

        image = layer.image or None
        build = None
        command = layer.command
        if layer.build is not None:
            build = self._resolve_build(layer.build, name, project_dir)
        elif image is None:
            inspector = self.inspector or ProjectInspector(project_dir)
            found = inspector.find_containerfile()
            if found:
                context, containerfile = found
                logger.debug(f"Using {containerfile} found in {project_dir}")
                build = self._resolve_build(
                    BuildSection(context=context, containerfile=containerfile), name, project_dir
                )
            else:
                image = DEFAULT_IMAGE
                if command is None:
                    command = list(KEEPALIVE_COMMAND)

        mounts = tuple(
            MountSpec(
                source=str(PathFinder.resolve_host_path(project_dir, mount.source)),
                target=mount.target,
                mode=mount.mode,
            )
            for mount in layer.mounts or []
        )

        try:
            return ProjectConfig(
                name=name,
                project_dir=project_dir,
                work_dir=work_dir,
                image=image,
                build=build,
                engine=layer.engine,
                home_dir=PathFinder.resolve_host_path(project_dir, layer.home_dir or DEFAULT_HOME_DIR),
                cache_dir=PathFinder.resolve_host_path(project_dir, layer.cache_dir or DEFAULT_CACHE_DIR),
                mounts=mounts,
                env=dict(layer.env or {}),
                user=layer.user,
                command=tuple(command or ()),
            )
        except ValidationError as e:
            raise ConfigValidationError(_describe_validation_error(e)) from e

    @staticmethod
    def _resolve_build(section: BuildSection, name: str, project_dir: Path) -> BuildSpec:
        return BuildSpec(
            context=PathFinder.resolve_host_path(project_dir, section.context or "."),
            containerfile=PathFinder.resolve_host_path(
                project_dir, section.containerfile or CONTAINERFILE_NAME
            ),
            tag=section.tag or default_image_tag(name),
        )
