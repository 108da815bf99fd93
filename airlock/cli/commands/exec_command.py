"""Exec command for Airlock."""

import sys

import click

from ...services.exceptions import AirlockError
from ..helpers import fail, get_project_runner


@click.command(name='exec', context_settings=dict(ignore_unknown_options=True,
                                                 allow_interspersed_args=False))
@click.option('--env', '-e', 'env_forward', multiple=True, metavar='NAME',
              help='Forward a host environment variable (repeatable; NAME or NAME=value)')
@click.argument('command', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def exec_command(ctx, env_forward, command):
    """Run COMMAND inside the sandbox, starting it if needed

    Example: airlock exec -e GITHUB_TOKEN -- git status
    """
    if not command:
        fail("exec", "a command is required, e.g. airlock exec -- ls -la", exit_code=2)

    runner = get_project_runner(ctx)

    try:
        runner.up()
    except (AirlockError, OSError) as e:
        fail("up", e)

    try:
        status = runner.exec(env_forward, list(command))
    except (AirlockError, ValueError) as e:
        fail("exec", e)

    sys.exit(status)
