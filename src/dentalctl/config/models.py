"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dentalctl.toml only contains
overrides. A clinic with stock roles and timing needs no file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# --- dentalctl.toml sections ---


class TimingConfig(BaseModel):
    """[timing] section — latency normalization for authentication."""

    model_config = {"frozen": True}

    min_response_ms: int = Field(default=200, ge=0)
    max_jitter_ms: int = Field(default=50, ge=0)


class LockoutConfig(BaseModel):
    """[lockout] section — failed-login throttling."""

    model_config = {"frozen": True}

    max_failed_attempts: int = Field(default=5, ge=1)
    lockout_minutes: int = Field(default=15, ge=1)
    attempt_window_minutes: int = Field(default=60, ge=1)


class AccessConfig(BaseModel):
    """[access] section.

    ``roles`` replaces the built-in role table when non-empty::

        [access.roles]
        dokter = ["patients:view", "medical_records:view"]
    """

    model_config = {"frozen": True}

    roles: dict[str, list[str]] = Field(default_factory=dict)
    aliases: dict[str, str] = Field(default_factory=dict)

    @field_validator("roles")
    @classmethod
    def _roles_are_named(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        for name in value:
            if not name.strip():
                raise ValueError("role names must be non-empty")
        return value


class ValidationConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    locale: str = "id"
