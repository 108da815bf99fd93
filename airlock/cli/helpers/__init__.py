"""CLI Helper Functions for Airlock.

This module provides reusable helper functions for CLI commands so every
command reports failures the same way:

- Loading the layered project configuration
- Detecting the container engine and building a runner
- One-line ``<stage> error: <message>`` reporting with a non-zero exit
- Consistent table formatting for output
"""

import sys
from typing import Any, List, NoReturn, Optional

import click
from tabulate import tabulate

from airlock.core.container_runner import ContainerRunner
from airlock.models.config import ProjectConfig
from airlock.services.engine_service import EngineService, detect_engine
from airlock.services.exceptions import ConfigError, ConfigNotFoundError, EngineError
from airlock.utils.config_manager import ConfigManager


def fail(stage: str, error: Any, exit_code: int = 1) -> NoReturn:
    """Print a one-line error for a failed stage and exit.

    Args:
        stage: Short name of the step that failed (e.g. 'config', 'up')
        error: Exception or message to report
        exit_code: Process exit status
    """
    message = " ".join(str(error).split())
    click.echo(f"{stage} error: {message}", err=True)
    sys.exit(exit_code)


def load_project_config(config_path: Optional[str] = None) -> ProjectConfig:
    """Locate and load the project configuration, exiting on failure.

    Args:
        config_path: Explicit path from --config; otherwise the current
            directory is searched

    Returns:
        The resolved project configuration
    """
    try:
        return ConfigManager.locate(config_path).load()
    except ConfigNotFoundError as e:
        if config_path is None:
            fail("config", f"{e}. Run: airlock init")
        fail("config", e)
    except ConfigError as e:
        fail("config", e)


def get_runner(config: ProjectConfig) -> ContainerRunner:
    """Detect the container engine and build a runner for the project.

    Note:
        Exits with an error message if no engine is available.
    """
    try:
        engine = detect_engine(config.engine)
    except EngineError as e:
        fail("engine", e)
    return ContainerRunner(config, EngineService(engine))


def get_project_runner(ctx: click.Context) -> ContainerRunner:
    """Load configuration from the group options and return a runner."""
    config_path = (ctx.obj or {}).get('config_path')
    return get_runner(load_project_config(config_path))


def print_table(headers: List[str], rows: List[List[Any]],
                tablefmt: str = "simple") -> None:
    """Print a table with project-wide defaults.

    Args:
        headers: Table headers
        rows: Table rows
        tablefmt: Table format (default: "simple")
    """
    click.echo(tabulate(rows, headers=headers, tablefmt=tablefmt))
