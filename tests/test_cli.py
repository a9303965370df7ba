"""Tests for the root dentalctl CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from dentalctl import __version__
from dentalctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "dentalctl" in result.output
    for group in ("validate", "auth", "access"):
        assert group in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/missing-dentalctl.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_cwd")
class TestConfigOption:
    def test_explicit_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "clinic.toml"
        config.write_text('[validation]\nlocale = "en"\n')
        result = cli_runner.invoke(cli, ["-c", str(config), "validate", "duration", "45"])
        assert result.exit_code == 0
        assert "45 min" in result.stdout

    def test_invalid_toml_reported(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "dentalctl.toml").write_text("[timing\n")
        result = cli_runner.invoke(cli, ["access", "matrix"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.stderr


@pytest.mark.usefixtures("_isolated_cwd")
def test_verbose_logs_to_stderr(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(
        cli, ["-v", "--log-json", "access", "check", "--role", "janitor", "patients:view"]
    )
    assert result.exit_code == 0
    assert "Unrecognized role: janitor" in result.stderr
    assert "Unrecognized role" not in result.stdout
