"""AuthenticationService — the guarded login gate and header checks.

Looking up the user and comparing password hashes is the host
application's job. It is passed in as an ``authenticate(username, password)``
coroutine that returns a :class:`Principal` or raises
:class:`~dentalctl.domain.errors.InvalidCredentials`. This service wraps
that call with input validation, lockout, and the timing-attack guard.

Login flow:
    1. Normalize the username and apply the login password rule.
    2. Under the timing guard: reject locked accounts, call
       ``authenticate``, count the failure or clear the history.
    3. Report the principal's roles and resolved permissions.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from dentalctl.domain.credentials import PASSWORD_POLICIES, validate_username
from dentalctl.domain.errors import AccountLocked, DentalError, InvalidCredentials
from dentalctl.domain.tokens import extract_bearer_token, validate_token_format
from dentalctl.services.access import build_resolver
from dentalctl.services.base import BaseService
from dentalctl.services.lockout import LoginAttemptTracker
from dentalctl.services.result import ServiceResult
from dentalctl.services.timing import TimingAttackGuard

if TYPE_CHECKING:
    from dentalctl.config.settings import DentalSettings
    from dentalctl.domain.permissions import PermissionResolver

logger = logging.getLogger(__name__)


class Principal(BaseModel):
    """The authenticated user as reported by the host's authenticate callback."""

    model_config = {"frozen": True}

    user_id: int | str | None = None
    username: str
    roles: list[str] = Field(default_factory=list)


Authenticator = Callable[[str, str], Awaitable[Principal]]


class AuthenticationService(BaseService):
    """Login gate combining credential rules, lockout, and latency normalization."""

    def __init__(
        self,
        settings: DentalSettings | None = None,
        *,
        guard: TimingAttackGuard | None = None,
        tracker: LoginAttemptTracker | None = None,
        resolver: PermissionResolver | None = None,
    ) -> None:
        super().__init__(settings)
        self.guard = guard or TimingAttackGuard.from_config(self._settings.timing)
        self.tracker = tracker or LoginAttemptTracker(self._settings.lockout)
        self._resolver = resolver or build_resolver(self._settings.access)

    async def login(
        self,
        username: str | None,
        password: str | None,
        authenticate: Authenticator,
    ) -> ServiceResult:
        op = "login"
        try:
            normalized = validate_username(username)
            PASSWORD_POLICIES["login"](password)
        except DentalError as exc:
            return self._fail(op, exc)
        assert password is not None

        async def attempt() -> Principal:
            if self.tracker.is_locked(normalized):
                raise AccountLocked(normalized, self.tracker.remaining_lockout_seconds(normalized))
            try:
                principal = await authenticate(normalized, password)
            except InvalidCredentials:
                self.tracker.record_failure(normalized)
                raise
            self.tracker.clear(normalized)
            return principal

        start = self.guard.now_ms()
        try:
            principal = await self.guard.execute(attempt)
        except (AccountLocked, InvalidCredentials) as exc:
            return self._fail(
                op,
                exc,
                username=normalized,
                failed_attempts=self.tracker.failed_count(normalized),
            )
        except DentalError as exc:
            return self._fail(op, exc, username=normalized)

        logger.info("User logged in: %s", principal.username)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "user_id": principal.user_id,
                "username": principal.username,
                "roles": principal.roles,
                "permissions": self._resolver.permissions_for_roles(principal.roles),
            },
            meta={"elapsed_ms": round(self.guard.now_ms() - start, 1)},
        )

    def check_authorization_header(self, header: str | None) -> ServiceResult:
        """Extract the bearer token and check its JWT shape."""
        op = "check_authorization"
        try:
            token = extract_bearer_token(header)
            validate_token_format(token)
        except DentalError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data={"token": token})

    def unlock(self, username: str) -> ServiceResult:
        """Administrative unlock of a username."""
        try:
            normalized = validate_username(username)
        except DentalError as exc:
            return self._fail("unlock", exc)
        was_tracked = self.tracker.unlock(normalized)
        return ServiceResult(
            ok=True,
            op="unlock",
            data={"username": normalized, "was_tracked": was_tracked},
        )

    async def probe_timing(self, *, fail: bool = False) -> ServiceResult:
        """Time an empty operation under the guard.

        With *fail* the operation raises :class:`InvalidCredentials`, so an
        operator can compare the padded latency of both outcomes.
        """
        op = "timing_probe"

        async def noop() -> None:
            if fail:
                raise InvalidCredentials()

        start = self.guard.now_ms()
        outcome = "success"
        try:
            await self.guard.execute(noop)
        except InvalidCredentials:
            outcome = "failure"
        elapsed = self.guard.now_ms() - start
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "outcome": outcome,
                "elapsed_ms": round(elapsed, 1),
                "min_response_ms": self.guard.min_response_ms,
                "max_jitter_ms": self.guard.max_jitter_ms,
            },
        )
