"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from airlock.models.config import (
    ConfigLayer,
    MountSpec,
    ProjectConfig,
    UserSpec,
    default_image_tag,
    normalize_env,
    sanitize_name,
)
from airlock.models.container import MountArg, UserConfig


class TestNames:
    """Test name sanitizing."""

    def test_sanitize_name(self):
        assert sanitize_name("My_Project.v2") == "my-project-v2"
        assert sanitize_name("demo") == "demo"

    def test_default_image_tag(self):
        assert default_image_tag("Web App") == "airlock:web-app"


class TestNormalizeEnv:
    """Test the accepted env spellings."""

    def test_mapping(self):
        assert normalize_env({"A": 1, "B": True, "C": None}) == {"A": "1", "B": "true", "C": ""}

    def test_list_of_strings(self):
        assert normalize_env(["A=1", "B=x=y", "C"]) == {"A": "1", "B": "x=y", "C": ""}

    def test_list_of_mappings(self):
        assert normalize_env([{"A": "1"}, {"B": False}]) == {"A": "1", "B": "false"}

    def test_invalid(self):
        with pytest.raises(ValueError):
            normalize_env("A=1")


class TestConfigLayer:
    """Test single-file parsing."""

    def test_aliases_and_presence(self):
        """Test YAML keys map to fields and presence is tracked."""
        layer = ConfigLayer.model_validate({
            "projectDir": "..",
            "workdir": "/src",
            "home": "~/h",
            "cache": "~/c",
        })
        assert layer.project_dir == ".."
        assert layer.work_dir == "/src"
        assert layer.home_dir == "~/h"
        assert layer.cache_dir == "~/c"
        assert layer.is_set("work_dir")
        assert not layer.is_set("image")

    def test_null_keys_are_absent(self):
        layer = ConfigLayer.model_validate({"image": None, "name": "x"})
        assert not layer.is_set("image")
        assert layer.is_set("name")

    def test_unknown_keys_ignored(self):
        layer = ConfigLayer.model_validate({"name": "x", "futureKey": 1})
        assert layer.name == "x"

    def test_command_string_is_split(self):
        layer = ConfigLayer.model_validate({"command": "sleep 'a b'"})
        assert layer.command == ["sleep", "a b"]

    def test_numbers_read_as_strings(self):
        layer = ConfigLayer.model_validate({"name": 2024, "image": 2, "build": {"tag": 1.0}})
        assert layer.name == "2024"
        assert layer.image == "2"
        assert layer.build.tag == "1.0"

    def test_engine_validated(self):
        with pytest.raises(ValidationError):
            ConfigLayer.model_validate({"engine": "lxc"})


class TestMountSpec:
    """Test explicit mount validation."""

    def test_default_mode(self):
        assert MountSpec(source=".", target="/src").mode == "rw"
        assert MountSpec(source=".", target="/src", mode=None).mode == "rw"

    def test_invalid_mode(self):
        with pytest.raises(ValidationError):
            MountSpec(source=".", target="/src", mode="rx")

    def test_relative_target(self):
        with pytest.raises(ValidationError):
            MountSpec(source=".", target="src")

    def test_empty_source(self):
        with pytest.raises(ValidationError):
            MountSpec(source="", target="/src")


class TestUserSpec:
    def test_relative_home(self):
        with pytest.raises(ValidationError):
            UserSpec(home="home/dev")


class TestProjectConfig:
    """Test resolved configuration invariants."""

    def test_requires_one_image_source(self, project_dir):
        with pytest.raises(ValidationError):
            ProjectConfig(name="demo", project_dir=project_dir,
                          home_dir=project_dir, cache_dir=project_dir)

    def test_properties(self, image_config, project_dir):
        assert image_config.container_name == "airlock-demo"
        assert image_config.image_ref == "docker.io/library/ubuntu:24.04"
        assert image_config.state_dir == project_dir / ".airlock"

    def test_build_image_ref(self, build_config):
        assert build_config.image_ref == "airlock:demo"

    def test_frozen(self, image_config):
        with pytest.raises(ValidationError):
            image_config.name = "other"

    def test_env_read_only(self, image_config):
        assert image_config.env == {"EDITOR": "vim"}
        with pytest.raises(TypeError):
            image_config.env["EDITOR"] = "nano"


class TestContainerModels:
    """Test engine argument rendering."""

    def test_user_arg(self):
        assert UserConfig(name="dev", home="/home/dev").user_arg == "dev"
        assert UserConfig(name="dev", home="/home/dev", uid=1001).user_arg == "1001"
        assert UserConfig(name="dev", home="/home/dev", uid=1001, gid=100).user_arg == "1001:100"

    def test_mount_arg(self):
        assert MountArg(source="/h", target="/home/dev", options=["Z"]).to_arg() == "/h:/home/dev:Z"
        assert MountArg(source="/h", target="/data", options=["ro", "Z"]).to_arg() == "/h:/data:ro,Z"
        assert MountArg(target="/workspace/.airlock").to_arg() == "/workspace/.airlock"
        assert MountArg(source="/h", target="/data").to_arg() == "/h:/data"
