"""Usage policy definitions.

Single source of truth for the governance limits applied to guests and
accounts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from postsmith.config import Settings


@dataclass(frozen=True, slots=True)
class UsagePolicy:
    guest_daily_limit: int = 1
    daily_limit: int = 10
    cooldown_seconds: int = 10
    max_history_items: int = 20
    cache_ttl_seconds: int = 300

    @classmethod
    def from_settings(cls, settings: Settings) -> UsagePolicy:
        return cls(
            guest_daily_limit=settings.guest_daily_limit,
            daily_limit=settings.daily_generation_limit,
            cooldown_seconds=settings.cooldown_seconds,
            max_history_items=settings.max_history_items,
            cache_ttl_seconds=settings.cache_ttl_seconds,
        )


DEFAULT_POLICY = UsagePolicy()
