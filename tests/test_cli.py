"""Tests for the riskconfig CLI (init, serve commands)."""

import sys
from unittest.mock import patch

import pytest

from riskconfig.cli import cmd_init, main


class FakeArgs:
    """Fake argparse namespace."""
    def __init__(self, **kwargs):
        self.port = kwargs.get("port", None)
        self.guide = kwargs.get("guide", None)
        self.force = kwargs.get("force", False)


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Set up isolated CLI environment using tmp_path as home."""
    config_dir = tmp_path / ".risk-config"
    monkeypatch.setattr("riskconfig.cli.CONFIG_DIR", config_dir)
    monkeypatch.setattr("riskconfig.cli.CONFIG_FILE", config_dir / "config.yaml")
    return tmp_path


class TestInitCommand:
    """Tests for `riskconfig init`."""

    def test_init_creates_config_file(self, cli_env):
        result = cmd_init(FakeArgs())

        assert result == 0
        config = cli_env / ".risk-config" / "config.yaml"
        assert config.exists()
        assert "port: 3000" in config.read_text()

    def test_init_written_config_loads(self, cli_env):
        from riskconfig.server.config import RiskConfigServiceConfig

        cmd_init(FakeArgs(port=8080, guide=str(cli_env / "guide.md")))
        config = RiskConfigServiceConfig.from_file(cli_env / ".risk-config" / "config.yaml")

        assert config.server.port == 8080
        assert config.guide.path == str((cli_env / "guide.md").resolve())

    def test_init_refuses_overwrite(self, cli_env):
        assert cmd_init(FakeArgs()) == 0
        assert cmd_init(FakeArgs(port=9999)) == 1
        assert "port: 3000" in (cli_env / ".risk-config" / "config.yaml").read_text()

    def test_init_force_overwrites(self, cli_env):
        cmd_init(FakeArgs())
        assert cmd_init(FakeArgs(port=9999, force=True)) == 0
        assert "port: 9999" in (cli_env / ".risk-config" / "config.yaml").read_text()


class TestServeCommand:
    """Tests for `riskconfig serve`."""

    def test_serve_passes_overrides(self, tmp_path, monkeypatch):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("server:\n  port: 9000\n")
        monkeypatch.setattr(sys, "argv", [
            "riskconfig", "serve", "--config", str(config_path),
            "--host", "0.0.0.0", "--log-level", "debug",
        ])

        with patch("riskconfig.server.app.run_server") as mock_run:
            main()

        kwargs = mock_run.call_args.kwargs
        assert kwargs["config"].server.port == 9000
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] is None
        assert kwargs["log_level"] == "debug"

    def test_no_command_prints_help(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["riskconfig"])
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
