"""Tests for main CLI module."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from crd_browser import __version__
from crd_browser.cli.main import app


class TestCLIMain:
    """Test main CLI entry point."""

    @pytest.mark.unit
    def test_help_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "Browse resource kinds and objects" in result.stdout
        for command in ("status", "resources", "namespaces", "objects", "get"):
            assert command in result.stdout

    @pytest.mark.unit
    def test_no_args_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, [])

        assert "Usage" in result.output

    @pytest.mark.unit
    def test_version_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"crdb version {__version__}" in result.stdout

    @pytest.mark.unit
    def test_verbose_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--verbose", "--help"])

        assert result.exit_code == 0

    @pytest.mark.unit
    def test_missing_explicit_config_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--config", "/nonexistent/crdb.yaml", "resources"])

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    @pytest.mark.unit
    def test_invalid_base_url_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--base-url", "browser.test", "resources"])

        assert result.exit_code == 1
        assert "Invalid --base-url" in result.output
