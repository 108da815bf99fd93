"""Test for __main__.py module."""

from unittest.mock import patch


def test_main_module():
    """Test that __main__.py can be imported and does not run the CLI."""
    with patch('airlock.cli.main.cli') as mock_cli:
        import airlock.__main__
        mock_cli.assert_not_called()


def test_version():
    import airlock

    assert airlock.__version__ == "0.5.0"
