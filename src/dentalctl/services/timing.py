"""Timing-attack guard — normalize the latency of authentication calls.

Wraps an async operation so that success, failure, and cheap or expensive
internal branches all take at least ``MIN_RESPONSE_TIME_MS`` plus a
uniform random jitter of up to ``MAX_JITTER_MS``. The jitter is drawn
again on every call.

INVARIANT: The wrapped operation's result or exception passes through
unchanged. Only latency is altered.

Each call keeps its own start time and jitter, so concurrent calls never
coordinate. The wrapped operation is not time-boxed. The delay uses
``asyncio.sleep``, so cancelling the awaiting task cancels the delay too.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import random
import time
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, ParamSpec, TypeVar

from dentalctl.config.models import TimingConfig

logger = logging.getLogger(__name__)

MIN_RESPONSE_TIME_MS = 200
MAX_JITTER_MS = 50

_P = ParamSpec("_P")
_T = TypeVar("_T")


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class TimingAttackGuard:
    """Pad every guarded call up to a jittered minimum response time.

    Args:
        min_response_ms: Floor for the total latency of a guarded call.
        max_jitter_ms: Upper bound of the random extra latency.
        clock: Millisecond clock; defaults to ``time.monotonic``.
        rand: Source of uniform ``[0, 1)`` floats; defaults to ``random.random``.
        sleep: Async sleep taking seconds; defaults to ``asyncio.sleep``.
    """

    def __init__(
        self,
        min_response_ms: float = MIN_RESPONSE_TIME_MS,
        max_jitter_ms: float = MAX_JITTER_MS,
        *,
        clock: Callable[[], float] | None = None,
        rand: Callable[[], float] | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self.min_response_ms = min_response_ms
        self.max_jitter_ms = max_jitter_ms
        self._clock = clock or _monotonic_ms
        self._random = rand or random.random
        self._sleep = sleep or asyncio.sleep

    @classmethod
    def from_config(cls, config: TimingConfig) -> TimingAttackGuard:
        return cls(config.min_response_ms, config.max_jitter_ms)

    def now_ms(self) -> float:
        """Current reading of the guard's clock, for use as a start time."""
        return self._clock()

    def calculate_delay(self, start_ms: float) -> float:
        """Milliseconds still to wait so that a call begun at *start_ms* meets the floor.

        Never negative. A start time in the future only lengthens the delay.
        """
        elapsed = self._clock() - start_ms
        jitter = self._random() * self.max_jitter_ms
        return max(0.0, self.min_response_ms + jitter - elapsed)

    async def ensure_minimum_response_time(self, start_ms: float) -> None:
        delay_ms = self.calculate_delay(start_ms)
        if delay_ms > 0:
            logger.debug("Timing guard padding response by %.1fms", delay_ms)
            await self._sleep(delay_ms / 1000)

    async def execute(self, operation: Callable[[], Awaitable[_T]]) -> _T:
        """Run *operation* and return its result, or re-raise its error, after the delay."""
        start = self._clock()
        try:
            result = await operation()
        except Exception:
            await self.ensure_minimum_response_time(start)
            raise
        await self.ensure_minimum_response_time(start)
        return result

    def protect(
        self, func: Callable[_P, Awaitable[_T]]
    ) -> Callable[_P, Coroutine[Any, Any, _T]]:
        """Decorator form of :meth:`execute` for async functions."""

        @functools.wraps(func)
        async def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _T:
            return await self.execute(lambda: func(*args, **kwargs))

        return wrapper


async def execute_with_timing_protection(operation: Callable[[], Awaitable[_T]]) -> _T:
    """Run *operation* under a guard with the default 200ms + 50ms jitter floor."""
    return await TimingAttackGuard().execute(operation)
