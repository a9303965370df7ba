"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from dentalctl.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["validate", "--help"], ["money", "payment-date", "invoice", "duration", "record"]),
    (["validate", "money", "--help"], ["AMOUNT"]),
    (["validate", "payment-date", "--help"], ["VALUE"]),
    (["validate", "invoice", "--help"], ["NUMBER"]),
    (["validate", "duration", "--help"], ["MINUTES"]),
    (["validate", "record", "--help"], ["SCHEMA", "SOURCE"]),
    (["auth", "--help"], ["username", "password", "header", "timing"]),
    (["auth", "username", "--help"], ["NAME"]),
    (["auth", "password", "--help"], ["--password", "--policy"]),
    (["auth", "header", "--help"], ["VALUE"]),
    (["auth", "timing", "--help"], ["--fail"]),
    (["access", "--help"], ["check", "list", "matrix"]),
    (["access", "check", "--help"], ["--role", "--any", "PERMISSIONS"]),
    (["access", "list", "--help"], ["--role"]),
    (["access", "matrix", "--help"], []),
]


def _help_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--help")


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[_help_id(item) for item in HELP_COMMANDS],
)
def test_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "--examples" in result.output
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"
