"""Main CLI entry point for Airlock."""

import logging
import sys

import click

from airlock import __version__
from .commands.down import down
from .commands.enter import enter
from .commands.exec_command import exec_command
from .commands.info import info
from .commands.init import init
from .commands.list_containers import list_containers
from .commands.up import up


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; --verbose also shows engine commands."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(level)


@click.group()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Path to airlock.yaml (default: ./airlock.yaml or ./airlock.yml)')
@click.option('--verbose', '-v', is_flag=True, help='Print engine commands as they run')
@click.version_option(__version__, prog_name='airlock')
@click.pass_context
def cli(ctx, config_path, verbose):
    """Airlock - Persistent per-project development sandboxes"""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['verbose'] = verbose


# Register commands
cli.add_command(init)
cli.add_command(up)
cli.add_command(enter)
cli.add_command(exec_command)
cli.add_command(down)
cli.add_command(list_containers)
cli.add_command(info)


if __name__ == '__main__':
    cli()
