import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from airlock.models.config import BuildSpec, ProjectConfig
from airlock.models.container import Engine


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def isolated_cli_runner(cli_runner):
    """Provides a CLI runner with isolated filesystem."""
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def project_dir(tmp_path):
    """Creates a temporary project directory."""
    project = tmp_path / "demo"
    project.mkdir()
    return project


@pytest.fixture
def image_config(project_dir):
    """Provides a resolved configuration that runs a prebuilt image."""
    return ProjectConfig(
        name="demo",
        project_dir=project_dir,
        image="docker.io/library/ubuntu:24.04",
        home_dir=project_dir / ".airlock" / "home",
        cache_dir=project_dir / ".airlock" / "cache",
        env={"EDITOR": "vim"},
    )


@pytest.fixture
def build_config(project_dir):
    """Provides a resolved configuration that builds from a Containerfile."""
    return ProjectConfig(
        name="demo",
        project_dir=project_dir,
        build=BuildSpec(
            context=project_dir,
            containerfile=project_dir / "Containerfile",
            tag="airlock:demo",
        ),
        home_dir=project_dir / ".airlock" / "home",
        cache_dir=project_dir / ".airlock" / "cache",
    )


@pytest.fixture
def image_inspect_output():
    """Builds `image inspect --format json` output for a Config record."""
    def _make(user="ubuntu", working_dir="/workspace", env=None):
        return json.dumps([{
            "Id": "sha256:abc",
            "Config": {
                "User": user,
                "WorkingDir": working_dir,
                "Env": env if env is not None else ["PATH=/usr/bin:/bin"],
            },
        }])
    return _make


@pytest.fixture
def completed():
    """Builds CompletedProcess results for mocked subprocess.run calls."""
    def _make(returncode=0, stdout="", stderr=""):
        return subprocess.CompletedProcess(args=[], returncode=returncode,
                                           stdout=stdout, stderr=stderr)
    return _make


@pytest.fixture
def mock_engine_service():
    """Provides a mocked podman EngineService."""
    service = MagicMock()
    service.engine = Engine.PODMAN
    service.binary = "podman"
    service.is_rootless_capable = True
    return service


@pytest.fixture
def write_file():
    """Writes a text file, creating parent directories."""
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path
    return _write
