"""Tests for the CLI module."""

from __future__ import annotations

import signal as sig
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from switchboard.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def valid_config_file(tmp_path: Path) -> Path:
    """Create temporary valid config file."""
    path = tmp_path / "switchboard.yaml"
    path.write_text(
        """
server:
  host: 127.0.0.1
  port: 9100
  max_clients: 4
state:
  initial: true
actuator:
  active_low: false
display:
  enabled: false
"""
    )
    return path


@pytest.fixture
def invalid_config_file(tmp_path: Path) -> Path:
    """Create temporary invalid config file."""
    path = tmp_path / "bad.yaml"
    path.write_text("server:\n  port: not-a-port\n")
    return path


class TestCliBasics:
    """Tests for top-level CLI options."""

    def test_cli_help(self, runner: CliRunner) -> None:
        """Should show help."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "run" in result.output
        assert "validate" in result.output

    def test_cli_version(self, runner: CliRunner) -> None:
        """Should show version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "switchboard" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_validate_valid_config(self, runner: CliRunner, valid_config_file: Path) -> None:
        """Should print a summary and exit 0."""
        result = runner.invoke(cli, ["validate", str(valid_config_file)])

        assert result.exit_code == 0
        assert "Server: 127.0.0.1:9100" in result.output
        assert "Max clients: 4" in result.output
        assert "Initial state: on" in result.output
        assert "Actuator: active-high" in result.output
        assert "Display: disabled" in result.output

    def test_validate_invalid_config(self, runner: CliRunner, invalid_config_file: Path) -> None:
        """Should exit 1 on invalid config."""
        result = runner.invoke(cli, ["validate", str(invalid_config_file)])

        assert result.exit_code == 1

    def test_validate_missing_file(self, runner: CliRunner) -> None:
        """Should reject a missing file."""
        result = runner.invoke(cli, ["validate", "/nonexistent/switchboard.yaml"])

        assert result.exit_code != 0


class TestRunCommand:
    """Tests for the run command."""

    def test_run_invalid_config(self, runner: CliRunner, invalid_config_file: Path) -> None:
        """Should exit 1 when the config cannot be loaded."""
        result = runner.invoke(cli, ["run", str(invalid_config_file)])

        assert result.exit_code == 1

    def test_run_invalid_port_override(self, runner: CliRunner) -> None:
        """An out-of-range --port is a configuration error."""
        result = runner.invoke(cli, ["run", "--port", "70000"])

        assert result.exit_code == 1

    @patch("switchboard.cli.main.signal.signal")
    @patch("switchboard.cli.main.SwitchboardServer")
    def test_run_starts_and_stops_server(
        self,
        mock_server_cls: MagicMock,
        mock_signal: MagicMock,
        runner: CliRunner,
        valid_config_file: Path,
    ) -> None:
        """Should start the server with overrides and stop it on SIGINT."""

        def deliver_sigint() -> None:
            handlers = {call.args[0]: call.args[1] for call in mock_signal.call_args_list}
            handlers[sig.SIGINT](sig.SIGINT, None)

        server = mock_server_cls.return_value
        server.start_background = AsyncMock(side_effect=deliver_sigint)
        server.stop = AsyncMock()
        server.port = 9200

        result = runner.invoke(
            cli, ["run", str(valid_config_file), "--port", "9200", "--no-display"]
        )

        assert result.exit_code == 0, result.output
        store, server_config = mock_server_cls.call_args.args
        assert store.get().value is True
        assert server_config.port == 9200
        assert server_config.host == "127.0.0.1"
        server.start_background.assert_awaited_once()
        server.stop.assert_awaited_once()

        signal_calls = [call.args[0] for call in mock_signal.call_args_list]
        assert sig.SIGINT in signal_calls
        assert sig.SIGTERM in signal_calls
