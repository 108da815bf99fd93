"""List command for Airlock."""

import click

from ...services.exceptions import AirlockError
from ..helpers import fail, get_project_runner


@click.command(name='list')
@click.pass_context
def list_containers(ctx):
    """List running airlock sandboxes"""
    runner = get_project_runner(ctx)

    try:
        names = runner.list()
    except AirlockError as e:
        fail("list", e)

    for name in names:
        click.echo(name)
