"""Failed-login tracking and temporary account lockout.

Counts failures per identifier (normally the normalized username) inside
a sliding attempt window. Reaching ``max_failed_attempts`` locks the
identifier for ``lockout_minutes``. State is in-process memory; a
multi-process deployment needs a shared store behind the same interface.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from dentalctl.config.models import LockoutConfig

logger = logging.getLogger(__name__)


@dataclass
class _Attempts:
    count: int
    first_attempt_at: float
    locked_until: float | None = None


class LoginAttemptTracker:
    """Thread-safe failed-attempt counter with timed lockout.

    Args:
        config: Thresholds; defaults to 5 attempts / 60 min window / 15 min lock.
        clock: Seconds clock; defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        config: LockoutConfig | None = None,
        *,
        clock: Callable[[], float] | None = None,
    ) -> None:
        cfg = config or LockoutConfig()
        self.max_failed_attempts = cfg.max_failed_attempts
        self.lockout_seconds = cfg.lockout_minutes * 60
        self.attempt_window_seconds = cfg.attempt_window_minutes * 60
        self._clock = clock or time.monotonic
        self._attempts: dict[str, _Attempts] = {}
        self._lock = threading.Lock()

    def is_locked(self, identifier: str) -> bool:
        """True while a lockout is active. An expired lockout is cleared here."""
        with self._lock:
            attempt = self._attempts.get(identifier)
            if attempt is None or attempt.locked_until is None:
                return False
            if self._clock() < attempt.locked_until:
                logger.warning("Account locked: %s", identifier)
                return True
            del self._attempts[identifier]
            logger.info("Account unlocked after timeout: %s", identifier)
            return False

    def record_failure(self, identifier: str) -> int:
        """Count one failed attempt; returns the count inside the current window."""
        now = self._clock()
        with self._lock:
            attempt = self._attempts.get(identifier)
            if attempt is None or now - attempt.first_attempt_at > self.attempt_window_seconds:
                self._attempts[identifier] = _Attempts(count=1, first_attempt_at=now)
                logger.debug("First failed attempt recorded for: %s", identifier)
                return 1

            attempt.count += 1
            if attempt.count >= self.max_failed_attempts:
                attempt.locked_until = now + self.lockout_seconds
                logger.warning(
                    "Account locked after %d failed attempts: %s",
                    self.max_failed_attempts,
                    identifier,
                )
            else:
                logger.debug(
                    "Failed attempt %d/%d for: %s",
                    attempt.count,
                    self.max_failed_attempts,
                    identifier,
                )
            return attempt.count

    def clear(self, identifier: str) -> None:
        """Forget all failures for *identifier* (after a successful login)."""
        with self._lock:
            if self._attempts.pop(identifier, None) is not None:
                logger.info("Failed attempts cleared for: %s", identifier)

    def unlock(self, identifier: str) -> bool:
        """Administrative unlock. Returns True if anything was tracked."""
        with self._lock:
            tracked = self._attempts.pop(identifier, None) is not None
        if tracked:
            logger.info("Account manually unlocked: %s", identifier)
        return tracked

    def remaining_lockout_seconds(self, identifier: str) -> int:
        with self._lock:
            attempt = self._attempts.get(identifier)
            if attempt is None or attempt.locked_until is None:
                return 0
            remaining = max(0.0, attempt.locked_until - self._clock())
        return math.ceil(remaining)

    def failed_count(self, identifier: str) -> int:
        with self._lock:
            attempt = self._attempts.get(identifier)
            return attempt.count if attempt else 0

    def is_tracking(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._attempts

    def locked_identifiers(self) -> list[str]:
        now = self._clock()
        with self._lock:
            return sorted(
                key
                for key, attempt in self._attempts.items()
                if attempt.locked_until is not None and now < attempt.locked_until
            )

    def cleanup_expired(self) -> int:
        """Drop expired lockouts and stale unlocked windows; returns how many."""
        now = self._clock()
        with self._lock:
            expired = [
                key
                for key, attempt in self._attempts.items()
                if (attempt.locked_until is not None and now >= attempt.locked_until)
                or (
                    attempt.locked_until is None
                    and now - attempt.first_attempt_at > self.attempt_window_seconds
                )
            ]
            for key in expired:
                del self._attempts[key]
        if expired:
            logger.debug("Cleaned up %d expired entries", len(expired))
        return len(expired)
