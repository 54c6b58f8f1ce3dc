"""Minimum-interval rate limiter for outbound link checks."""

from __future__ import annotations

import threading
import time


class RateLimiter:
    """Thread-safe minimum-interval limiter.

    Args:
        requests_per_minute: Maximum requests allowed per minute. Zero or
            a negative value disables waiting entirely.
    """

    def __init__(self, requests_per_minute: int = 60) -> None:
        self._interval = 60.0 / requests_per_minute if requests_per_minute > 0 else 0.0
        self._last_request_time: float | None = None
        self._lock = threading.Lock()

    @property
    def interval(self) -> float:
        """Seconds enforced between two consecutive requests."""
        return self._interval

    def wait(self) -> float:
        """Block until the next request is allowed; return seconds slept."""
        with self._lock:
            slept = 0.0
            now = time.monotonic()
            if self._last_request_time is not None and self._interval:
                elapsed = now - self._last_request_time
                if elapsed < self._interval:
                    slept = self._interval - elapsed
                    time.sleep(slept)
            self._last_request_time = time.monotonic()
            return slept
