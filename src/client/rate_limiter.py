"""Token bucket rate limiter for outbound Flickr calls.

One limiter instance is shared by every worker of a run because the
usage policy applies to the API key, not to a region.
"""

from __future__ import annotations

import threading
import time
from typing import Callable


class TokenBucketRateLimiter:
    """Thread-safe token bucket.

    With the default capacity of one token, consecutive calls are spaced
    at least ``1 / rate`` seconds apart, starting with the first call.
    """

    def __init__(
        self,
        rate: float,
        capacity: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the bucket.

        Args:
            rate: Tokens added per second.
            capacity: Maximum stored tokens.
            clock: Monotonic time source.
            sleep: Blocking sleep used while waiting for a token.

        Raises:
            ValueError: If rate or capacity is not positive.
        """
        if rate <= 0 or capacity <= 0:
            raise ValueError("rate and capacity must be positive")
        self._rate = rate
        self._capacity = capacity
        self._clock = clock
        self._sleep = sleep
        self._tokens = 0.0
        self._last_refill = clock()
        self._lock = threading.Lock()

    def acquire(self) -> float:
        """Block until one token is available and consume it.

        Returns:
            Total seconds spent waiting.
        """
        waited = 0.0
        while True:
            with self._lock:
                self._refill()
                if self._tokens >= 1:
                    self._tokens -= 1
                    return waited
                wait_for = (1 - self._tokens) / self._rate
            self._sleep(wait_for)
            waited += wait_for

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last_refill)
        self._last_refill = now
        self._tokens = min(self._capacity, self._tokens + elapsed * self._rate)
