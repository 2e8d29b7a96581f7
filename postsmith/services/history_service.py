"""Size-bounded per-account generation history."""

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from postsmith.records import HistoryItem
from postsmith.repositories.history_store import HistoryStore
from postsmith.utils.clock import Clock, utc_now
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryFilters:
    platform: Optional[str] = None
    tone: Optional[str] = None
    date: Optional[date] = None


class HistoryService:
    """Append-then-trim log of generations, newest first."""

    def __init__(self, store: HistoryStore, max_items: int = 20, clock: Clock = utc_now):
        self.store = store
        self.max_items = max_items
        self._clock = clock

    def new_item_id(self) -> str:
        """Time-derived id: epoch milliseconds plus a short random suffix."""
        millis = int(self._clock().timestamp() * 1000)
        return f"{millis}-{uuid.uuid4().hex[:6]}"

    async def append(self, identity: str, item: HistoryItem) -> None:
        """Write ``item`` then delete everything beyond ``max_items``."""
        await self.store.add(identity, item)

        items = await self.store.list_recent(identity)
        overflow = [i.id for i in items[self.max_items :]]
        if overflow:
            removed = await self.store.delete(identity, overflow)
            log.debug("history trimmed", identity=identity, removed=removed)

    async def query(
        self, identity: str, filters: Optional[HistoryFilters] = None
    ) -> list[HistoryItem]:
        """Up to ``max_items`` newest-first items matching every given filter."""
        items = await self.store.list_recent(identity, self.max_items)
        if filters is None:
            return items
        if filters.platform:
            items = [i for i in items if i.platform == filters.platform]
        if filters.tone:
            items = [i for i in items if i.tone == filters.tone]
        if filters.date:
            items = [i for i in items if i.created_at.date() == filters.date]
        return items
