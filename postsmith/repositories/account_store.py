"""Account record storage.

The usage ledger only needs four primitives from a backing store, captured by
``AccountStore``. ``compare_and_swap`` is the transaction primitive: it writes
the usage fields only if nobody else wrote them since ``expected_version`` was
read.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from postsmith.models.account import Account
from postsmith.records import AccountRecord, BrandProfile, UsageUpdate
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


class AccountStore(Protocol):
    async def get(self, identity: str) -> AccountRecord | None: ...

    async def insert_if_absent(self, record: AccountRecord) -> AccountRecord:
        """Insert ``record`` unless the identity exists. Returns the stored record."""
        ...

    async def compare_and_swap(
        self, identity: str, expected_version: int, usage: UsageUpdate
    ) -> AccountRecord | None:
        """Write ``usage`` if the stored version still equals ``expected_version``.

        Returns the updated record, or None when the version moved on (or the
        record is gone).
        """
        ...

    async def save_profile(self, identity: str, profile: BrandProfile) -> None: ...


class InMemoryAccountStore:
    """Process-local store. Used with ``store_backend=memory`` and in tests."""

    def __init__(self) -> None:
        self._records: dict[str, AccountRecord] = {}
        self._lock = asyncio.Lock()

    async def get(self, identity: str) -> AccountRecord | None:
        return self._records.get(identity)

    async def insert_if_absent(self, record: AccountRecord) -> AccountRecord:
        async with self._lock:
            existing = self._records.get(record.identity)
            if existing is not None:
                return existing
            self._records[record.identity] = record
            log.info("account created", identity=record.identity)
            return record

    async def compare_and_swap(
        self, identity: str, expected_version: int, usage: UsageUpdate
    ) -> AccountRecord | None:
        async with self._lock:
            current = self._records.get(identity)
            if current is None or current.version != expected_version:
                return None
            updated = current.with_usage(usage)
            self._records[identity] = updated
            return updated

    async def save_profile(self, identity: str, profile: BrandProfile) -> None:
        async with self._lock:
            current = self._records.get(identity)
            if current is None:
                self._records[identity] = AccountRecord(identity=identity, brand_profile=profile)
            else:
                self._records[identity] = replace(current, brand_profile=profile)


def _to_record(row: Account) -> AccountRecord:
    return AccountRecord(
        identity=row.identity,
        name=row.name or "",
        email=row.email or "",
        daily_generations=row.daily_generations or 0,
        total_generations=row.total_generations or 0,
        last_reset_date=row.last_reset_date,
        cooldown_until=row.cooldown_until,
        brand_profile=BrandProfile(
            display_name=row.display_name or "",
            bio=row.bio or "",
            writing_style=row.writing_style or "",
            target_audience=row.target_audience or "",
        ),
        created_at=row.created_at,
        version=row.version or 0,
    )


class SqlAccountStore:
    """PostgreSQL-backed store. Each call runs in its own short transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, identity: str) -> AccountRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(select(Account).where(Account.identity == identity))
            row = result.scalar_one_or_none()
            return _to_record(row) if row is not None else None

    async def insert_if_absent(self, record: AccountRecord) -> AccountRecord:
        profile = record.brand_profile
        values = {
            "identity": record.identity,
            "name": record.name,
            "email": record.email,
            "daily_generations": record.daily_generations,
            "total_generations": record.total_generations,
            "last_reset_date": record.last_reset_date,
            "cooldown_until": record.cooldown_until,
            "version": record.version,
            "display_name": profile.display_name,
            "bio": profile.bio,
            "writing_style": profile.writing_style,
            "target_audience": profile.target_audience,
        }
        if record.created_at is not None:
            values["created_at"] = record.created_at

        async with self._session_factory() as session:
            result = await session.execute(
                insert(Account)
                .values(**values)
                .on_conflict_do_nothing(index_elements=[Account.identity])
            )
            await session.commit()
            if result.rowcount:
                log.info("account created", identity=record.identity)

        stored = await self.get(record.identity)
        return stored if stored is not None else record

    async def compare_and_swap(
        self, identity: str, expected_version: int, usage: UsageUpdate
    ) -> AccountRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(
                update(Account)
                .where(Account.identity == identity, Account.version == expected_version)
                .values(
                    daily_generations=usage.daily_generations,
                    total_generations=usage.total_generations,
                    last_reset_date=usage.last_reset_date,
                    cooldown_until=usage.cooldown_until,
                    version=Account.version + 1,
                )
                .returning(Account)
            )
            row = result.scalar_one_or_none()
            record = _to_record(row) if row is not None else None
            await session.commit()

        if record is None:
            log.debug("usage write lost race", identity=identity, expected_version=expected_version)
        return record

    async def save_profile(self, identity: str, profile: BrandProfile) -> None:
        async with self._session_factory() as session:
            await session.execute(
                update(Account)
                .where(Account.identity == identity)
                .values(
                    display_name=profile.display_name,
                    bio=profile.bio,
                    writing_style=profile.writing_style,
                    target_audience=profile.target_audience,
                )
            )
            await session.commit()
        log.debug("brand profile saved", identity=identity)
