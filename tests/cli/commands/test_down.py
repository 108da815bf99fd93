"""Tests for the down command."""

from unittest.mock import MagicMock, patch

from airlock.cli.main import cli


class TestDownCommand:
    """Test cases for airlock down."""

    @patch('airlock.cli.commands.down.get_project_runner')
    def test_down(self, mock_get_runner, cli_runner):
        runner = MagicMock()
        runner.down.return_value = 'airlock-demo'
        mock_get_runner.return_value = runner

        result = cli_runner.invoke(cli, ['down'])

        assert result.exit_code == 0
        assert 'Removed airlock-demo' in result.output
        runner.down.assert_called_once_with(None)

    @patch('airlock.cli.commands.down.get_project_runner')
    def test_down_named(self, mock_get_runner, cli_runner):
        runner = MagicMock()
        runner.down.return_value = 'airlock-other'
        mock_get_runner.return_value = runner

        result = cli_runner.invoke(cli, ['down', 'other'])

        assert result.exit_code == 0
        runner.down.assert_called_once_with('other')
