import logging

import pytest

from airlock import __version__
from airlock.cli.main import cli


class TestMainCLI:
    """Smoke tests for main CLI functionality."""

    def test_cli_help(self, cli_runner):
        """Test that CLI shows help."""
        result = cli_runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Airlock' in result.output
        assert 'Commands:' in result.output

    def test_cli_no_args(self, cli_runner):
        """Test CLI with no arguments shows usage."""
        result = cli_runner.invoke(cli, [])
        assert 'Usage:' in result.output

    def test_cli_invalid_command(self, cli_runner):
        """Test CLI with invalid command."""
        result = cli_runner.invoke(cli, ['invalid-command'])
        assert result.exit_code != 0
        assert 'No such command' in result.output

    def test_cli_commands(self, cli_runner):
        """Test that all commands are registered."""
        result = cli_runner.invoke(cli, ['--help'])
        for cmd in ['init', 'up', 'enter', 'exec', 'down', 'list', 'info']:
            assert cmd in result.output

    def test_version(self, cli_runner):
        result = cli_runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.parametrize("args,level", [
        (['list', '--help'], logging.WARNING),
        (['-v', 'list', '--help'], logging.INFO),
        (['--verbose', 'list', '--help'], logging.INFO),
    ])
    def test_verbose_sets_log_level(self, cli_runner, args, level):
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert logging.getLogger().level == level
