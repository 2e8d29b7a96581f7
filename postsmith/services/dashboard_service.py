"""Per-account aggregate statistics."""

from collections import Counter

from postsmith.schemas.dashboard import DashboardResponse
from postsmith.services.history_service import HistoryService
from postsmith.services.usage_ledger import AccountUsageLedger

NOT_AVAILABLE = "N/A"


def _most_used(counts: Counter) -> str:
    # Counter keeps first-seen order, so ties go to the newest item
    if not counts:
        return NOT_AVAILABLE
    return counts.most_common(1)[0][0]


class DashboardService:
    def __init__(self, ledger: AccountUsageLedger, history: HistoryService):
        self.ledger = ledger
        self.history = history

    async def summarize(self, identity: str) -> DashboardResponse:
        """Lifetime and daily usage plus breakdowns over the stored history.

        Raises:
            UserNotFoundError: No account record for ``identity``
        """
        record = await self.ledger.get(identity)
        items = await self.history.query(identity)

        platforms = Counter(item.platform for item in items)
        tones = Counter(item.tone for item in items)

        return DashboardResponse(
            total_posts=record.total_generations,
            daily_usage=record.daily_generations,
            limit=self.ledger.daily_limit,
            most_used_platform=_most_used(platforms),
            most_used_tone=_most_used(tones),
            platform_breakdown=dict(platforms),
            tone_breakdown=dict(tones),
        )
