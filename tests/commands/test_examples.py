"""Tests for the --examples flag on CLI commands."""

from __future__ import annotations

import click
import pytest
from click.testing import CliRunner

from dentalctl.cli import cli
from dentalctl.commands._base import DentalCommand

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["validate", "--examples"], ["dentalctl validate money", "dentalctl validate record"]),
    (["validate", "money", "--examples"], ["10.005"]),
    (["validate", "payment-date", "--examples"], ["+07:00"]),
    (["validate", "invoice", "--examples"], ["INV/20240115/0001"]),
    (["validate", "duration", "--examples"], ["DENTALCTL_VALIDATION__LOCALE=en"]),
    (["validate", "record", "--examples"], ["medical_record_treatment -"]),
    (["auth", "--examples"], ["dentalctl auth header"]),
    (["auth", "username", "--examples"], ["dr_budi"]),
    (["auth", "password", "--examples"], ["--policy login"]),
    (["auth", "header", "--examples"], ["Bearer aaa.bbb.ccc"]),
    (["auth", "timing", "--examples"], ["--fail"]),
    (["access", "--examples"], ["dentalctl access matrix"]),
    (["access", "check", "--examples"], ["--any"]),
    (["access", "list", "--examples"], ["--role staf"]),
    (["access", "matrix", "--examples"], ["--json access matrix"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


class TestExamplesEagerExit:
    def test_skips_required_arguments(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["access", "check", "--examples"])
        assert result.exit_code == 0
        assert "Missing argument" not in result.output

    def test_skips_password_prompt(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["auth", "password", "--examples"])
        assert result.exit_code == 0
        assert "Password:" not in result.output


class TestExamplesFormatting:
    def test_examples_indented_uniformly(self) -> None:
        @click.command(cls=DentalCommand, examples="\n    dentalctl one\n    dentalctl two\n")
        def sample() -> None:
            pass

        result = CliRunner().invoke(sample, ["--examples"], prog_name="sample")
        assert result.exit_code == 0
        assert result.output == "Examples for 'sample':\n\n  dentalctl one\n  dentalctl two\n"

    def test_no_flag_without_examples(self) -> None:
        @click.command(cls=DentalCommand)
        def bare() -> None:
            pass

        assert all(p.name != "examples" for p in bare.params)
