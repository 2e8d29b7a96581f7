"""Per-IP daily quota for unauthenticated callers.

In-memory, per instance, reset on restart. Check and increment are separate
steps with no atomicity between them: this is a soft abuse deterrent, not a
billing control.
"""

from __future__ import annotations

from datetime import date, timedelta

from postsmith.exceptions import GuestLimitExceededError
from postsmith.utils.clock import Clock, today, utc_now
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


class GuestQuotaTracker:
    """Counts guest generations per (ip, UTC day)."""

    def __init__(self, limit: int = 1, clock: Clock = utc_now):
        self.limit = limit
        self._clock = clock
        self._counts: dict[tuple[str, date], int] = {}
        self._last_seen_day: date | None = None

    def __len__(self) -> int:
        return len(self._counts)

    def used(self, ip: str) -> int:
        return self._counts.get((ip, today(self._clock)), 0)

    def check(self, ip: str) -> None:
        """Raise ``GuestLimitExceededError`` if the IP used up today's quota."""
        used = self.used(ip)
        if used >= self.limit:
            log.info("guest limit reached", ip=ip, used=used, limit=self.limit)
            raise GuestLimitExceededError(limit=self.limit)

    def increment(self, ip: str) -> int:
        day = today(self._clock)
        if day != self._last_seen_day:
            self._sweep(day)
            self._last_seen_day = day
        key = (ip, day)
        self._counts[key] = self._counts.get(key, 0) + 1
        return self._counts[key]

    def _sweep(self, day: date) -> None:
        """Drop entries older than yesterday."""
        cutoff = day - timedelta(days=1)
        stale = [key for key in self._counts if key[1] < cutoff]
        for key in stale:
            del self._counts[key]
        if stale:
            log.debug("guest quota entries swept", count=len(stale))
