"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from dentalctl.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("dentalctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("dentalctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("dentalctl.test")
        log.warning("json test", attempts=5)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["attempts"] == 5
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "dentalctl.test"
        assert "timestamp" in parsed

    def test_stdlib_module_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("dentalctl.services.lockout").warning("Account locked: budi")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Account locked: budi"
        assert parsed["logger"] == "dentalctl.services.lockout"

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("dentalctl.services.timing").debug("padding")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_third_party_debug_hidden_when_verbose(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("urllib3").debug("connection pool")
        assert capfd.readouterr().err == ""

    def test_exception_rendered_in_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("dentalctl.test")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            log.exception("guarded call failed")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "guarded call failed"
        assert "RuntimeError: boom" in parsed["exception"]
