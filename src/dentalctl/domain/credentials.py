"""Credential validation — usernames and passwords.

Two password rules exist and both are kept explicit:

- **basic** (:func:`validate_password`): length >= 8 only. Used at login so
  accounts created under older rules can still authenticate.
- **strong** (:func:`validate_new_password`): lower, upper, digit and a
  special character from ``@$!%*?&#``; no other characters. Used whenever a
  password is set (register, change, reset).

:data:`PASSWORD_POLICIES` names the canonical rule per use.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from dentalctl.domain.errors import InvalidInput

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
_USERNAME_PATTERN = re.compile(r"[a-z0-9_]+", re.ASCII)

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARS = "@$!%*?&#"
PASSWORD_REGEX = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&#])[A-Za-z\d@$!%*?&#]{8,}$",
    re.ASCII,
)
PASSWORD_VALIDATION_MESSAGE = (
    "Password harus minimal 8 karakter, mengandung huruf besar, huruf kecil, "
    "angka, dan karakter khusus (@$!%*?&#)"
)


def validate_username(raw: str | None) -> str:
    """Normalize and validate a username; returns the trimmed lowercase form."""
    if not raw or not raw.strip():
        raise InvalidInput("Username is required")

    username = raw.strip().lower()
    if len(username) < USERNAME_MIN_LENGTH:
        raise InvalidInput(f"Username must be at least {USERNAME_MIN_LENGTH} characters")
    if len(username) > USERNAME_MAX_LENGTH:
        raise InvalidInput(f"Username must not exceed {USERNAME_MAX_LENGTH} characters")
    if _USERNAME_PATTERN.fullmatch(username) is None:
        raise InvalidInput(
            "Username can only contain lowercase letters, numbers, and underscores"
        )
    return username


def validate_password(raw: str | None) -> None:
    """Basic login rule: present and at least 8 characters. No complexity checks."""
    if not raw:
        raise InvalidInput("Password is required")
    if len(raw) < PASSWORD_MIN_LENGTH:
        raise InvalidInput(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")


@dataclass(frozen=True)
class PasswordStrength:
    """Every unmet requirement of the strong password rule."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


def check_password_strength(raw: object) -> PasswordStrength:
    if not isinstance(raw, str):
        return PasswordStrength(is_valid=False, errors=["Password harus berupa teks"])

    errors: list[str] = []
    if len(raw) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password minimal {PASSWORD_MIN_LENGTH} karakter")
    if not re.search(r"[a-z]", raw):
        errors.append("Password harus mengandung minimal satu huruf kecil")
    if not re.search(r"[A-Z]", raw):
        errors.append("Password harus mengandung minimal satu huruf besar")
    if not re.search(r"\d", raw, re.ASCII):
        errors.append("Password harus mengandung minimal satu angka")
    if not any(ch in PASSWORD_SPECIAL_CHARS for ch in raw):
        errors.append(
            f"Password harus mengandung minimal satu karakter khusus ({PASSWORD_SPECIAL_CHARS})"
        )
    if raw and not errors and PASSWORD_REGEX.fullmatch(raw) is None:
        errors.append(
            "Password hanya boleh berisi huruf, angka, dan karakter khusus "
            f"({PASSWORD_SPECIAL_CHARS})"
        )
    return PasswordStrength(is_valid=not errors, errors=errors)


def validate_new_password(raw: str | None) -> None:
    """Strong rule for setting a password; raises with every unmet requirement."""
    if not raw:
        raise InvalidInput("Password is required")
    strength = check_password_strength(raw)
    if not strength.is_valid:
        raise InvalidInput("; ".join(strength.errors))


def validate_password_confirmation(password: str | None, confirmation: str | None) -> None:
    if password != confirmation:
        raise InvalidInput("Konfirmasi password tidak cocok")


PASSWORD_POLICIES: dict[str, Callable[[str | None], None]] = {
    "login": validate_password,
    "register": validate_new_password,
    "change_password": validate_new_password,
    "reset_password": validate_new_password,
}
