"""User schemas."""

from datetime import date, datetime
from typing import Optional

from postsmith.records import AccountRecord
from postsmith.schemas.common import CamelModel
from postsmith.schemas.profile import BrandProfileSchema


class AccountResponse(CamelModel):
    uid: str
    name: str = ""
    email: str = ""
    daily_generations: int
    total_generations: int
    daily_limit: int
    last_reset_date: Optional[date] = None
    cooldown_until: Optional[datetime] = None
    brand_profile: BrandProfileSchema
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: AccountRecord, daily_limit: int) -> "AccountResponse":
        return cls(
            uid=record.identity,
            name=record.name,
            email=record.email,
            daily_generations=record.daily_generations,
            total_generations=record.total_generations,
            daily_limit=daily_limit,
            last_reset_date=record.last_reset_date,
            cooldown_until=record.cooldown_until,
            brand_profile=BrandProfileSchema.from_profile(record.brand_profile),
            created_at=record.created_at,
        )


class MeResponse(CamelModel):
    """Response for /me endpoint."""

    user: AccountResponse
