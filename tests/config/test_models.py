"""Tests for config models: defaults and sparse overrides."""

import pytest
from pydantic import ValidationError

from dentalctl.config.models import (
    AccessConfig,
    LockoutConfig,
    TimingConfig,
    ValidationConfig,
)


class TestSections:
    def test_defaults(self) -> None:
        assert TimingConfig().min_response_ms == 200
        assert TimingConfig().max_jitter_ms == 50
        lockout = LockoutConfig()
        assert lockout.max_failed_attempts == 5
        assert lockout.lockout_minutes == 15
        assert lockout.attempt_window_minutes == 60
        assert AccessConfig().roles == {}
        assert ValidationConfig().locale == "id"

    def test_sparse_override(self) -> None:
        lockout = LockoutConfig.model_validate({"max_failed_attempts": 3})
        assert lockout.max_failed_attempts == 3
        assert lockout.lockout_minutes == 15

    def test_frozen(self) -> None:
        cfg = TimingConfig()
        with pytest.raises(ValidationError):
            cfg.min_response_ms = 0  # type: ignore[misc]


class TestBounds:
    def test_negative_timing_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TimingConfig(min_response_ms=-1)

    def test_zero_attempts_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LockoutConfig(max_failed_attempts=0)

    def test_blank_role_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AccessConfig(roles={" ": ["patients:view"]})
