"""Allow running Airlock as ``python -m airlock``."""

from .cli.main import cli

if __name__ == '__main__':
    cli(prog_name='airlock')
