"""Tests for environment composition."""

from airlock.core.environment import EnvironmentComposer
from airlock.models.container import UserConfig


def _user(home="/home/dev"):
    return UserConfig(name="dev", home=home)


class TestEnvironmentComposer:
    """Test cases for EnvironmentComposer."""

    def test_precedence(self):
        env = EnvironmentComposer().compose(
            ["PATH=/bin", "LANG=C", "EDITOR=nano"],
            {"EDITOR": "vim", "TOKEN": "x"},
            _user(),
            "/workspace",
        )
        assert env["PATH"] == "/bin"
        assert env["LANG"] == "C"
        assert env["EDITOR"] == "vim"
        assert env["TOKEN"] == "x"

    def test_identity_forced(self, caplog):
        env = EnvironmentComposer().compose(
            ["HOME=/root"],
            {"HOME": "/tmp", "XDG_CACHE_HOME": "/tmp/cache", "WORKDIR": "/x"},
            _user(),
            "/workspace",
        )
        assert env["HOME"] == "/home/dev"
        assert env["XDG_CACHE_HOME"] == "/home/dev/.cache"
        assert env["XDG_CONFIG_HOME"] == "/home/dev/.config"
        assert env["XDG_DATA_HOME"] == "/home/dev/.local/share"
        assert env["WORKDIR"] == "/workspace"
        assert "Ignoring configured values for HOME, WORKDIR, XDG_CACHE_HOME" in caplog.text

    def test_image_entries_without_value_ignored(self):
        env = EnvironmentComposer().compose(["BROKEN", "A=b=c"], {}, _user(), "/w")
        assert "BROKEN" not in env
        assert env["A"] == "b=c"

    def test_identity_last(self):
        env = EnvironmentComposer().compose(["Z=1"], {"Y": "2"}, _user(), "/w")
        assert list(env)[-5:] == ["HOME", "XDG_CACHE_HOME", "XDG_CONFIG_HOME", "XDG_DATA_HOME", "WORKDIR"]

    def test_forward(self, caplog):
        pairs = EnvironmentComposer.forward(
            ["TOKEN", "MISSING", "MODE=ci"], {"TOKEN": "s3cret"}
        )
        assert pairs == ["TOKEN=s3cret", "MODE=ci"]
        assert "Not forwarding MISSING" in caplog.text

    def test_forward_reads_process_env(self, monkeypatch):
        monkeypatch.setenv("AIRLOCK_TEST_VAR", "1")
        assert EnvironmentComposer.forward(["AIRLOCK_TEST_VAR"]) == ["AIRLOCK_TEST_VAR=1"]

    def test_to_args(self):
        assert EnvironmentComposer.to_args({"A": "1", "B": "x y"}) == ["-e", "A=1", "-e", "B=x y"]
