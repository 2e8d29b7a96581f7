"""Generation history storage."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Protocol, Sequence

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from postsmith.models.history_entry import HistoryEntry
from postsmith.records import HistoryItem
from postsmith.schemas.quality import QualityAssessment
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


class HistoryStore(Protocol):
    async def add(self, identity: str, item: HistoryItem) -> None: ...

    async def list_recent(self, identity: str, limit: int | None = None) -> list[HistoryItem]:
        """Up to ``limit`` items (all when None), newest first."""
        ...

    async def delete(self, identity: str, item_ids: Sequence[str]) -> int: ...


def _newest_first(items: list[HistoryItem]) -> list[HistoryItem]:
    return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)


class InMemoryHistoryStore:
    """Process-local history log keyed by identity."""

    def __init__(self) -> None:
        self._items: dict[str, dict[str, HistoryItem]] = defaultdict(dict)
        self._lock = asyncio.Lock()

    async def add(self, identity: str, item: HistoryItem) -> None:
        async with self._lock:
            self._items[identity][item.id] = item

    async def list_recent(self, identity: str, limit: int | None = None) -> list[HistoryItem]:
        async with self._lock:
            items = list(self._items.get(identity, {}).values())
        ordered = _newest_first(items)
        return ordered if limit is None else ordered[:limit]

    async def delete(self, identity: str, item_ids: Sequence[str]) -> int:
        removed = 0
        async with self._lock:
            bucket = self._items.get(identity, {})
            for item_id in item_ids:
                if bucket.pop(item_id, None) is not None:
                    removed += 1
        return removed


def _to_item(row: HistoryEntry) -> HistoryItem:
    return HistoryItem(
        id=row.id,
        topic=row.topic,
        platform=row.platform,
        tone=row.tone,
        language=row.language,
        text=row.text,
        quality=QualityAssessment.model_validate(row.quality) if row.quality else None,
        refinement=row.refinement,
        created_at=row.created_at,
    )


class SqlHistoryStore:
    """PostgreSQL-backed history log."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def add(self, identity: str, item: HistoryItem) -> None:
        async with self._session_factory() as session:
            session.add(
                HistoryEntry(
                    id=item.id,
                    account_identity=identity,
                    topic=item.topic,
                    platform=item.platform,
                    tone=item.tone,
                    language=item.language,
                    text=item.text,
                    quality=item.quality.model_dump() if item.quality else None,
                    refinement=item.refinement,
                    created_at=item.created_at,
                )
            )
            await session.commit()

    async def list_recent(self, identity: str, limit: int | None = None) -> list[HistoryItem]:
        query = (
            select(HistoryEntry)
            .where(HistoryEntry.account_identity == identity)
            .order_by(desc(HistoryEntry.created_at), desc(HistoryEntry.id))
        )
        if limit is not None:
            query = query.limit(limit)
        async with self._session_factory() as session:
            result = await session.execute(query)
            return [_to_item(row) for row in result.scalars().all()]

    async def delete(self, identity: str, item_ids: Sequence[str]) -> int:
        if not item_ids:
            return 0
        async with self._session_factory() as session:
            result = await session.execute(
                delete(HistoryEntry).where(
                    HistoryEntry.account_identity == identity,
                    HistoryEntry.id.in_(list(item_ids)),
                )
            )
            await session.commit()
            return result.rowcount or 0
