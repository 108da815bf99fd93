"""Up command for Airlock."""

import click

from ...models.container import ContainerState
from ...services.exceptions import AirlockError
from ..helpers import fail, get_project_runner


@click.command()
@click.pass_context
def up(ctx):
    """Build the image if configured, then create or start the sandbox"""
    runner = get_project_runner(ctx)

    try:
        previous = runner.up()
    except (AirlockError, OSError) as e:
        fail("up", e)

    if previous == ContainerState.ABSENT:
        click.echo(f"Created {runner.container_name}")
    elif previous == ContainerState.STOPPED:
        click.echo(f"Started {runner.container_name}")
    else:
        click.echo(f"{runner.container_name} is already running")
