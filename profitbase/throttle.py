from __future__ import annotations

import logging
import time

logger = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL = 1


class ThrottleGate:
    """Minimum spacing between consecutive outbound requests.

    When a request comes in too early the gate sleeps for the whole
    ``min_interval``, not just the time remaining until the interval has
    elapsed. Callers relying on "at least ``min_interval`` since the start of
    the wait" keep working; the extra delay is a known inefficiency.

    Not thread-safe: one gate belongs to one client used sequentially.
    """

    def __init__(self, min_interval: float = DEFAULT_MIN_INTERVAL) -> None:
        self.min_interval = min_interval
        self.last_request_at: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @min_interval.setter
    def min_interval(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"min_interval must be >= 0, got {seconds}")
        self._min_interval = seconds

    def is_request_allowed(self) -> bool:
        if self.last_request_at is None:
            return True
        elapsed = time.monotonic() - self.last_request_at
        return elapsed >= self._min_interval

    def wait(self) -> None:
        """Block until the next request may be sent."""
        if self.is_request_allowed():
            return
        logger.debug(f"Throttling request for {self._min_interval}s")
        time.sleep(self._min_interval)

    def record(self) -> None:
        self.last_request_at = time.monotonic()
