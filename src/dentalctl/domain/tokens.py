"""Bearer header and JWT shape checks.

Structural only: no signature or expiry verification happens here.
The scheme name ``Bearer`` is matched case-sensitively.
"""

from __future__ import annotations

import re

from dentalctl.domain.errors import (
    InvalidAuthScheme,
    InvalidTokenFormat,
    MissingAuthorization,
    TokenNotProvided,
)

BEARER_SCHEME = "Bearer"
_BEARER_PATTERN = re.compile(r"Bearer\s+(.+)")
JWT_SEGMENTS = 3


def validate_token_format(token: str | None) -> None:
    """Require exactly three non-empty dot-separated segments."""
    if not token:
        raise InvalidTokenFormat("Token is required")

    parts = token.split(".")
    if len(parts) != JWT_SEGMENTS:
        raise InvalidTokenFormat("Invalid token format")
    if not all(parts):
        raise InvalidTokenFormat("Invalid token structure")


def extract_bearer_token(header: str | None) -> str:
    """Return the credential from an ``Authorization: Bearer <token>`` header value.

    Raises:
        MissingAuthorization: the header is absent or empty.
        TokenNotProvided: the header starts with ``Bearer`` but carries no token.
        InvalidAuthScheme: any other scheme, including ``bearer``/``BEARER``.
    """
    if not header:
        raise MissingAuthorization("Authorization header is required")

    match = _BEARER_PATTERN.fullmatch(header)
    if match is not None and match.group(1).strip():
        return match.group(1)
    if header.startswith(BEARER_SCHEME):
        raise TokenNotProvided("Token not provided")
    raise InvalidAuthScheme("Invalid authorization type")
