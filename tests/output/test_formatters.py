"""Tests for the format_result dispatcher and OutputSettings."""

import json

from dentalctl.output.formatters import OutputSettings, format_result
from dentalctl.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="ERR", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_mode(self) -> None:
        output = format_result(_ok("validate_money", amount=10.0), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["amount"] == 10.0

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(_err(), settings=settings))["ok"] is False

    def test_quiet_mode(self) -> None:
        settings = OutputSettings(quiet=True)
        assert format_result(_ok("validate_money"), settings=settings) == "OK: validate_money"
        assert format_result(_err("login", "nope"), settings=settings) == "ERROR: login: nope"

    def test_default_is_rich_text(self) -> None:
        output = format_result(_ok("validate_invoice", invoice="INV/20240101/0001"))
        assert output.startswith("OK")
        assert "invoice: INV/20240101/0001" in output
