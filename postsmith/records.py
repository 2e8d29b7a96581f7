"""Storage-agnostic records shared by the stores and the services."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime

from postsmith.schemas.quality import QualityAssessment


@dataclass(frozen=True, slots=True)
class BrandProfile:
    display_name: str = ""
    bio: str = ""
    writing_style: str = ""
    target_audience: str = ""


@dataclass(frozen=True, slots=True)
class UsageUpdate:
    """New values for the usage fields of an account record."""

    daily_generations: int
    total_generations: int
    last_reset_date: date
    cooldown_until: datetime | None


@dataclass(frozen=True, slots=True)
class AccountRecord:
    """Per-account usage and brand profile.

    ``version`` increases by one on every successful usage write and is what
    compare-and-swap checks against.
    """

    identity: str
    name: str = ""
    email: str = ""
    daily_generations: int = 0
    total_generations: int = 0
    last_reset_date: date | None = None
    cooldown_until: datetime | None = None
    brand_profile: BrandProfile = field(default_factory=BrandProfile)
    created_at: datetime | None = None
    version: int = 0

    def with_usage(self, update: UsageUpdate) -> AccountRecord:
        return replace(
            self,
            daily_generations=update.daily_generations,
            total_generations=update.total_generations,
            last_reset_date=update.last_reset_date,
            cooldown_until=update.cooldown_until,
            version=self.version + 1,
        )


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """One completed generation for an account. Immutable once written."""

    id: str
    topic: str
    platform: str
    tone: str
    language: str
    text: str
    created_at: datetime
    quality: QualityAssessment | None = None
    refinement: str | None = None
