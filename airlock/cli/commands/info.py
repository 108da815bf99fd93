"""Info command for Airlock."""

import click

from ...services.exceptions import AirlockError
from ..helpers import fail, get_project_runner, print_table


@click.command()
@click.pass_context
def info(ctx):
    """Show the resolved sandbox configuration and container state"""
    runner = get_project_runner(ctx)

    try:
        details = runner.info()
    except AirlockError as e:
        fail("info", e)

    print_table(["FIELD", "VALUE"], [[key, value] for key, value in details.items()])
