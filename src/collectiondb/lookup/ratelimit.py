"""Injectable pacing for calls to the lookup service."""

import time
from typing import Callable, Optional, Protocol

from collectiondb._internal.format_contract import DEFAULT_LOOKUP_INTERVAL_SECONDS


class RateLimiter(Protocol):
    def acquire(self) -> None:
        """Block until the next call is allowed."""
        ...


class NoDelay:
    """Rate limiter that never waits."""

    def acquire(self) -> None:
        return None


class FixedIntervalGate:
    """Allow at most one acquisition per ``interval`` seconds.

    The first acquisition passes immediately; each later one waits until
    ``interval`` seconds have elapsed since the previous acquisition.
    ``clock`` and ``sleep`` are injectable so tests never actually sleep.
    """

    def __init__(
        self,
        interval: float = DEFAULT_LOOKUP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._last: Optional[float] = None

    def acquire(self) -> None:
        now = self._clock()
        if self._last is not None:
            wait = self._last + self.interval - now
            if wait > 0:
                self._sleep(wait)
                now = self._clock()
        self._last = now
