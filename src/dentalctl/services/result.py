"""ServiceResult and ServiceError — what every service method returns.

Domain code raises :class:`~dentalctl.domain.errors.DentalError`; services
catch it at their boundary and report it here, so the CLI (or any host
framework) reads one shape for success and failure alike.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from dentalctl.domain.errors import DentalError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: DentalError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.detail())


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"check_permission"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: DentalError, **data: Any) -> ServiceResult:
        return cls(ok=False, op=op, data=data, error=ServiceError.from_exception(exc))
