"""
Per-source sliding window rate limiting.

Off by default; enabled through configuration. State lives in process
memory only, so limits are per worker process and reset on restart.
"""

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from ..config import RATE_LIMIT_CONSTANTS


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one rate limit check."""

    allowed: bool
    remaining: int
    retry_after: int = 0  # Seconds until the oldest hit leaves the window


class SlidingWindowRateLimiter:
    """Allow at most max_requests per key within any window_seconds span."""

    def __init__(
        self,
        max_requests: int = RATE_LIMIT_CONSTANTS["max_requests"],
        window_seconds: int = RATE_LIMIT_CONSTANTS["window_seconds"],
        clock: Optional[Callable[[], float]] = None,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self._hits: dict[str, deque] = {}
        self._last_sweep = self._clock()
        self._lock = threading.Lock()

    def check(self, key: str) -> RateLimitDecision:
        """Record a hit for key if it fits in the window."""
        now = self._clock()
        cutoff = now - self.window_seconds

        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now

            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= cutoff:
                hits.popleft()

            if len(hits) >= self.max_requests:
                retry_after = max(1, int(hits[0] + self.window_seconds - now))
                return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)

            hits.append(now)
            return RateLimitDecision(allowed=True, remaining=self.max_requests - len(hits))

    def _sweep(self, cutoff: float) -> None:
        # Drop keys whose newest hit has left the window; caller holds the lock
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]

    @property
    def tracked_keys(self) -> int:
        """Number of sources currently holding state."""
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        """Forget every recorded hit."""
        with self._lock:
            self._hits.clear()
