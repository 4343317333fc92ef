"""
Unit tests for the CLI interface.
"""

import json
from unittest.mock import Mock, patch

from click.testing import CliRunner

from totp_api.cli import cli

RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


class TestCLI:
    """Test cases for the CLI commands."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_cli_help(self) -> None:
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "TOTP API command line" in result.output

    def test_code_command(self) -> None:
        result = self.runner.invoke(cli, ["code", RFC_SECRET, "--at", "59"])
        assert result.exit_code == 0
        assert result.output.strip() == "287082 (1s remaining)"

    def test_code_command_json(self) -> None:
        result = self.runner.invoke(
            cli, ["code", RFC_SECRET, "--at", "1234567890", "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "success": True,
            "code": "005924",
            "remaining": 30,
        }

    def test_code_command_invalid_secret(self) -> None:
        result = self.runner.invoke(cli, ["code", "GEZDGNB1", "--at", "59"])
        assert result.exit_code == 1
        assert "invalid secret key" in result.output

    def test_code_command_non_ascii_secret(self) -> None:
        result = self.runner.invoke(cli, ["code", "GEZDGNBVGY3TQOJé", "--at", "59"])
        assert result.exit_code == 1
        assert "illegal base32 data" in result.output

    def test_code_command_invalid_secret_json(self) -> None:
        result = self.runner.invoke(cli, ["code", "", "--at", "59", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output) == {
            "success": False,
            "error": "invalid secret key: secret is empty",
        }

    def test_code_command_rejects_negative_time(self) -> None:
        result = self.runner.invoke(cli, ["code", RFC_SECRET, "--at", "-5"])
        assert result.exit_code == 2

    @patch("totp_api.cli.uvicorn.run")
    def test_serve_uses_settings_defaults(self, mock_run: Mock) -> None:
        result = self.runner.invoke(cli, ["serve"])
        assert result.exit_code == 0
        mock_run.assert_called_once()
        kwargs = mock_run.call_args.kwargs
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 7842
        assert kwargs["timeout_keep_alive"] == 120

    @patch("totp_api.cli.uvicorn.run")
    def test_serve_with_args(self, mock_run: Mock) -> None:
        result = self.runner.invoke(
            cli, ["serve", "--host", "127.0.0.1", "--port", "9000", "--log-level", "debug"]
        )
        assert result.exit_code == 0
        kwargs = mock_run.call_args.kwargs
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9000
        assert kwargs["log_level"] == "debug"
