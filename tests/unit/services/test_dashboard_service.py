"""Tests for dashboard aggregation."""

import pytest

from postsmith.exceptions import UserNotFoundError
from postsmith.records import HistoryItem


async def _add(history_service, clock, platform, tone):
    await history_service.append(
        "user-1",
        HistoryItem(
            id=history_service.new_item_id(),
            topic="Coffee",
            platform=platform,
            tone=tone,
            language="English",
            text="post",
            created_at=clock(),
        ),
    )
    clock.advance(minutes=1)


class TestDashboardService:
    @pytest.mark.asyncio
    async def test_missing_account_raises(self, dashboard_service):
        with pytest.raises(UserNotFoundError):
            await dashboard_service.summarize("ghost")

    @pytest.mark.asyncio
    async def test_empty_history(self, dashboard_service, ledger):
        await ledger.read_or_create("user-1")

        dashboard = await dashboard_service.summarize("user-1")

        assert dashboard.total_posts == 0
        assert dashboard.daily_usage == 0
        assert dashboard.limit == 10
        assert dashboard.most_used_platform == "N/A"
        assert dashboard.most_used_tone == "N/A"
        assert dashboard.platform_breakdown == {}
        assert dashboard.tone_breakdown == {}

    @pytest.mark.asyncio
    async def test_breakdowns_and_usage(self, dashboard_service, ledger, history_service, clock):
        await ledger.read_or_create("user-1")
        for _ in range(3):
            await ledger.increment_atomic("user-1")
            clock.advance(seconds=10)
        await _add(history_service, clock, "LinkedIn", "Professional")
        await _add(history_service, clock, "LinkedIn", "Casual")
        await _add(history_service, clock, "Instagram", "Casual")

        dashboard = await dashboard_service.summarize("user-1")

        assert dashboard.total_posts == 3
        assert dashboard.daily_usage == 3
        assert dashboard.most_used_platform == "LinkedIn"
        assert dashboard.most_used_tone == "Casual"
        assert dashboard.platform_breakdown == {"LinkedIn": 2, "Instagram": 1}
        assert dashboard.tone_breakdown == {"Casual": 2, "Professional": 1}

    @pytest.mark.asyncio
    async def test_tie_goes_to_most_recent(self, dashboard_service, ledger, history_service, clock):
        await ledger.read_or_create("user-1")
        await _add(history_service, clock, "Instagram", "Casual")
        await _add(history_service, clock, "Twitter/X", "Motivational")

        dashboard = await dashboard_service.summarize("user-1")

        assert dashboard.most_used_platform == "Twitter/X"
        assert dashboard.most_used_tone == "Motivational"

    @pytest.mark.asyncio
    async def test_serializes_camel_case(self, dashboard_service, ledger):
        await ledger.read_or_create("user-1")

        body = (await dashboard_service.summarize("user-1")).model_dump(by_alias=True)

        assert set(body) == {
            "totalPosts",
            "dailyUsage",
            "limit",
            "mostUsedPlatform",
            "mostUsedTone",
            "platformBreakdown",
            "toneBreakdown",
        }
