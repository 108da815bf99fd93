"""Configuration models for Airlock.

A project is described by up to two YAML files: the versioned base
``airlock.yaml`` and the unversioned ``.airlock/airlock.local.yaml``. Each
file is parsed into its own :class:`ConfigLayer` where every field is
optional, so whether a key was written in a file is answered by
``model_fields_set`` rather than by inspecting the raw text. Layers are
merged and defaulted by ``ConfigManager`` into a frozen
:class:`ProjectConfig`.
"""

import posixpath
import re
import shlex
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.constants import (
    CONTAINER_PREFIX,
    DATA_DIR_NAME,
    DEFAULT_MOUNT_MODE,
    IMAGE_TAG_PREFIX,
    MOUNT_MODES,
)
from .container import Engine


def sanitize_name(value: str) -> str:
    """Lowercase a name and replace anything outside [a-z0-9] with '-'."""
    return re.sub(r"[^a-z0-9]", "-", value.lower())


def default_image_tag(name: str) -> str:
    """Tag given to images built for a project that declares none."""
    return f"{IMAGE_TAG_PREFIX}:{sanitize_name(name)}"


def _env_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _split_env_item(item: str) -> Tuple[str, str]:
    key, sep, value = item.partition("=")
    return key, value if sep else ""


def normalize_env(value: Any) -> Dict[str, str]:
    """Normalize the accepted ``env`` spellings into a flat mapping.

    Accepts a mapping, a list of ``KEY=value`` strings (a bare ``KEY`` maps to
    the empty string) or a list of single-key mappings.
    """
    if isinstance(value, dict):
        return {str(k): _env_value(v) for k, v in value.items()}
    if isinstance(value, list):
        env = {}
        for item in value:
            if isinstance(item, dict):
                env.update({str(k): _env_value(v) for k, v in item.items()})
            elif isinstance(item, str):
                key, val = _split_env_item(item)
                env[key] = val
            else:
                raise ValueError(f"unsupported env entry: {item!r}")
        return env
    raise ValueError("env must be a mapping or a list of KEY=value strings")


class MountSpec(BaseModel):
    """Explicit bind mount declared in the configuration."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    source: str
    target: str
    mode: str = DEFAULT_MOUNT_MODE

    @field_validator("source")
    @classmethod
    def _source_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("mount source must not be empty")
        return value

    @field_validator("target")
    @classmethod
    def _target_absolute(cls, value: str) -> str:
        if not posixpath.isabs(value):
            raise ValueError(f"mount target must be an absolute path: {value}")
        return value

    @field_validator("mode", mode="before")
    @classmethod
    def _mode_known(cls, value: Any) -> str:
        if value is None or value == "":
            return DEFAULT_MOUNT_MODE
        if value not in MOUNT_MODES:
            raise ValueError(f"mount mode must be one of {', '.join(MOUNT_MODES)}")
        return value


class UserSpec(BaseModel):
    """Explicit sandbox user identity; unset fields come from the image."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: Optional[str] = None
    uid: Optional[int] = None
    gid: Optional[int] = None
    home: Optional[str] = None

    @field_validator("home")
    @classmethod
    def _home_absolute(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not posixpath.isabs(value):
            raise ValueError(f"user home must be an absolute path: {value}")
        return value


class BuildSection(BaseModel):
    """The ``build`` section as written in a configuration file."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    context: Optional[str] = None
    containerfile: Optional[str] = None
    tag: Optional[str] = None


class BuildSpec(BaseModel):
    """Fully resolved image build instructions."""

    model_config = ConfigDict(frozen=True)

    context: Path
    containerfile: Path
    tag: str


class ConfigLayer(BaseModel):
    """One configuration file, with every field optional."""

    # YAML reads unquoted scalars like `2024` or `1.0` as numbers
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    name: Optional[str] = None
    project_dir: Optional[str] = Field(None, alias="projectDir")
    work_dir: Optional[str] = Field(None, alias="workdir")
    image: Optional[str] = None
    build: Optional[BuildSection] = None
    engine: Optional[Engine] = None
    home_dir: Optional[str] = Field(None, alias="home")
    cache_dir: Optional[str] = Field(None, alias="cache")
    mounts: Optional[List[MountSpec]] = None
    env: Optional[Dict[str, str]] = None
    user: Optional[UserSpec] = None
    command: Optional[List[str]] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # A key written with no value is the same as a key not written.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("env", mode="before")
    @classmethod
    def _normalize_env(cls, value: Any) -> Dict[str, str]:
        return normalize_env(value)

    @field_validator("command", mode="before")
    @classmethod
    def _split_command(cls, value: Any) -> Any:
        if isinstance(value, str):
            return shlex.split(value)
        return value

    def is_set(self, field: str) -> bool:
        """Whether the field was present in the source file."""
        return field in self.model_fields_set


class ProjectConfig(BaseModel):
    """Fully resolved project configuration, immutable once built."""

    model_config = ConfigDict(frozen=True)

    name: str
    project_dir: Path
    work_dir: Optional[str] = None
    image: Optional[str] = None
    build: Optional[BuildSpec] = None
    engine: Optional[Engine] = None
    home_dir: Path
    cache_dir: Path
    mounts: Tuple[MountSpec, ...] = ()
    env: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    user: Optional[UserSpec] = None
    command: Tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("name is required")
        return value

    @field_validator("env")
    @classmethod
    def _freeze_env(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _single_image_source(self) -> "ProjectConfig":
        if (self.image is None) == (self.build is None):
            raise ValueError("exactly one of image or build must be resolved")
        return self

    @property
    def sanitized_name(self) -> str:
        """Project name usable as an image tag component."""
        return sanitize_name(self.name)

    @property
    def container_name(self) -> str:
        return f"{CONTAINER_PREFIX}{self.name}"

    @property
    def image_ref(self) -> str:
        """Image the sandbox container runs."""
        if self.build is not None:
            return self.build.tag
        return self.image

    @property
    def state_dir(self) -> Path:
        """Host-side local state directory."""
        return self.project_dir / DATA_DIR_NAME
