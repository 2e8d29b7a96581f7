"""Outer request rate limiter: N requests per minute per caller address.

In-memory sliding window, independent of the generation quotas. Resets on
restart and is per instance.
"""

from __future__ import annotations

import math
import time
from collections import defaultdict, deque
from typing import Callable

from postsmith.exceptions import TooManyRequestsError
from postsmith.utils.logger import get_logger

log = get_logger(__name__)

WINDOW_SECONDS = 60.0


class RequestRateLimiter:
    """Sliding-window counter keyed by caller address."""

    def __init__(
        self,
        requests_per_minute: int = 30,
        window_seconds: float = WINDOW_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.requests_per_minute = requests_per_minute
        self.window_seconds = window_seconds
        self._monotonic = monotonic
        self._windows: dict[str, deque[float]] = defaultdict(deque)
        self._last_prune = monotonic()

    def __len__(self) -> int:
        return len(self._windows)

    def hit(self, key: str) -> int:
        """Record one request for ``key``; return the count in the window.

        Raises:
            TooManyRequestsError: The window is already full. The rejected
                request is not recorded.
        """
        now = self._monotonic()
        window = self._windows[key]
        cutoff = now - self.window_seconds
        while window and window[0] <= cutoff:
            window.popleft()

        if len(window) >= self.requests_per_minute:
            retry_after = max(math.ceil(window[0] + self.window_seconds - now), 1)
            log.warning("request rate limited", key=key, count=len(window), retry_after=retry_after)
            raise TooManyRequestsError(
                "Too many requests. Please slow down.", retry_after=retry_after
            )

        window.append(now)
        # Full scan at most once per window
        if now - self._last_prune >= self.window_seconds:
            self._prune_idle(now)
            self._last_prune = now
        return len(window)

    def _prune_idle(self, now: float) -> None:
        """Drop keys whose newest request has left the window."""
        cutoff = now - self.window_seconds
        idle = [k for k, w in self._windows.items() if not w or w[-1] <= cutoff]
        for k in idle:
            del self._windows[k]
