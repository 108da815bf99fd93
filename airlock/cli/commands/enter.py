"""Enter command for Airlock."""

import sys

import click

from ...services.exceptions import AirlockError
from ..helpers import fail, get_project_runner


@click.command()
@click.option('--env', '-e', 'env_forward', multiple=True, metavar='NAME',
              help='Forward a host environment variable (repeatable; NAME or NAME=value)')
@click.pass_context
def enter(ctx, env_forward):
    """Open a login shell inside the sandbox, starting it if needed"""
    runner = get_project_runner(ctx)

    try:
        runner.up()
    except (AirlockError, OSError) as e:
        fail("up", e)

    try:
        status = runner.enter(env_forward)
    except AirlockError as e:
        fail("enter", e)

    sys.exit(status)
