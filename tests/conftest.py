"""Shared pytest fixtures and test helpers for dentalctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from dentalctl.config.settings import DentalSettings
from dentalctl.services.timing import TimingAttackGuard


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Drop handlers installed by CLI invocations (they point at closed runner streams)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    dental = logging.getLogger("dentalctl")
    dental_level = dental.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    dental.setLevel(dental_level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's DENTALCTL_* variables out of every test."""
    for key in list(os.environ):
        if key.startswith("DENTALCTL_"):
            monkeypatch.delenv(key)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no dentalctl.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on CLI test classes.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path) -> DentalSettings:
    """Code-default settings, isolated from any config on disk."""
    return DentalSettings.from_cli(start_dir=tmp_path)


# ---------------------------------------------------------------------------
# Fake time for the timing guard and lockout tracker
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock. ``sleep`` advances it instead of waiting."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, amount: float) -> None:
        self.now += amount

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds * 1000


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_guard(fake_clock: FakeClock) -> Callable[..., TimingAttackGuard]:
    """Build a guard on the fake clock with a fixed jitter fraction."""

    def factory(
        min_response_ms: float = 200, max_jitter_ms: float = 50, jitter: float = 0.0
    ) -> TimingAttackGuard:
        return TimingAttackGuard(
            min_response_ms,
            max_jitter_ms,
            clock=fake_clock,
            rand=lambda: jitter,
            sleep=fake_clock.sleep,
        )

    return factory
