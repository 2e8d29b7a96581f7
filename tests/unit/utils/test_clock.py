"""Tests for clock helpers."""

from datetime import date, datetime, timedelta, timezone

from postsmith.utils.clock import today, utc_now


class TestClock:
    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo is not None

    def test_today_uses_utc_date(self):
        # 23:30 at UTC-5 is already the next day in UTC
        local = datetime(2026, 3, 2, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert today(lambda: local) == date(2026, 3, 3)
