"""Domain exceptions — the error kinds raised by validators and value objects.

Every failure carries a stable machine ``code`` and a human ``message``.
The service layer maps these onto :class:`~dentalctl.services.result.ServiceError`;
HTTP status codes and localized copy belong to whoever hosts this library.

INVARIANT: Validators fail fast and synchronously. Nothing here is caught
and re-wrapped inside the domain layer.
"""

from __future__ import annotations

from typing import Any


class DentalError(Exception):
    """Base class for all dentalctl domain errors."""

    code: str = "DENTAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def detail(self) -> dict[str, Any]:
        """Extra structured context for the error payload."""
        return {}


class InvalidValueObject(DentalError):
    """A value object's invariant was violated at construction."""

    code = "INVALID_VALUE_OBJECT"


class InvalidInput(DentalError):
    """A credential field is empty, too short/long, or has disallowed characters."""

    code = "INVALID_INPUT"


class ValidationFailed(DentalError):
    """A single declarative field rule rejected its value."""

    code = "VALIDATION_FAILED"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field

    def detail(self) -> dict[str, Any]:
        return {"field": self.field}


# --- Authorization header / token family ---


class AuthorizationError(DentalError):
    """Structural failure of a bearer header or token."""

    code = "UNAUTHORIZED"


class MissingAuthorization(AuthorizationError):
    code = "MISSING_AUTHORIZATION"


class InvalidAuthScheme(AuthorizationError):
    code = "INVALID_AUTH_SCHEME"


class TokenNotProvided(AuthorizationError):
    code = "TOKEN_NOT_PROVIDED"


class InvalidTokenFormat(AuthorizationError):
    code = "INVALID_TOKEN_FORMAT"


# --- Login flow ---


class InvalidCredentials(AuthorizationError):
    """Raised by an authenticate callback when username/password do not match."""

    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class AccountLocked(AuthorizationError):
    """Too many failed login attempts for one identifier."""

    code = "ACCOUNT_LOCKED"

    def __init__(self, identifier: str, retry_after_seconds: int) -> None:
        super().__init__(
            f"Account temporarily locked. Try again in {retry_after_seconds} seconds"
        )
        self.identifier = identifier
        self.retry_after_seconds = retry_after_seconds

    def detail(self) -> dict[str, Any]:
        return {"retry_after_seconds": self.retry_after_seconds}
