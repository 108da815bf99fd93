"""Down command for Airlock."""

import click

from ..helpers import get_project_runner


@click.command()
@click.argument('name', required=False)
@click.pass_context
def down(ctx, name):
    """Stop and remove the sandbox container

    NAME: Another project's sandbox to remove (the airlock- prefix is optional)
    """
    runner = get_project_runner(ctx)
    removed = runner.down(name)
    click.echo(f"Removed {removed}")
