"""Init command for Airlock."""

from pathlib import Path

import click
from rich.console import Console

from ...utils.project_initializer import ProjectInitializer
from ..helpers import fail


@click.command()
@click.argument('name', required=False)
def init(name):
    """Create airlock.yaml, a starter Containerfile and local state directories.

    NAME: Project name (defaults to the current directory name)

    Existing files are left untouched.
    """
    console = Console()
    project_root = Path.cwd()

    try:
        created = ProjectInitializer(project_root, name).initialize()
    except OSError as e:
        fail("init", e)

    if not created:
        console.print("[yellow]Nothing to do; project already initialized[/yellow]")
        return

    for path in created:
        try:
            display = path.relative_to(project_root)
        except ValueError:
            display = path
        console.print(f"[green]Created[/green] {display}")
    console.print("\nNext: review airlock.yaml, then run 'airlock up'")
