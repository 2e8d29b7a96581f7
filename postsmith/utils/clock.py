"""Clock helpers. Time-dependent components take a ``Clock`` so tests can move time."""

from datetime import date, datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today(clock: Clock = utc_now) -> date:
    """Calendar date (UTC) of the given clock."""
    return clock().astimezone(timezone.utc).date()
