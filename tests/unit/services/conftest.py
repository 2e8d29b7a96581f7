"""Shared pytest fixtures for service tests."""

import asyncio

import pytest

from postsmith.repositories import InMemoryAccountStore
from postsmith.services.dashboard_service import DashboardService
from postsmith.services.generation_service import GenerationService
from postsmith.services.guest_quota import GuestQuotaTracker
from postsmith.services.history_service import HistoryService
from postsmith.services.response_cache import ResponseCache
from postsmith.services.usage_ledger import AccountUsageLedger
from postsmith.services.validation import SanitizationValidator


@pytest.fixture
def cache(upstream, clock):
    return ResponseCache(upstream, ttl_seconds=300, clock=clock)


@pytest.fixture
def guest_tracker(clock):
    return GuestQuotaTracker(limit=1, clock=clock)


@pytest.fixture
def ledger(account_store, policy, clock):
    return AccountUsageLedger(account_store, policy=policy, clock=clock)


@pytest.fixture
def history_service(history_store, clock):
    return HistoryService(history_store, max_items=20, clock=clock)


@pytest.fixture
def generation_service(cache, upstream, guest_tracker, ledger, history_service, clock):
    return GenerationService(
        validator=SanitizationValidator(),
        cache=cache,
        upstream=upstream,
        guest_tracker=guest_tracker,
        ledger=ledger,
        history=history_service,
        clock=clock,
    )


@pytest.fixture
def dashboard_service(ledger, history_service):
    return DashboardService(ledger, history_service)


class InterleavingAccountStore(InMemoryAccountStore):
    """Yields to the event loop on every read so concurrent callers see stale state."""

    async def get(self, identity):
        record = await super().get(identity)
        await asyncio.sleep(0)
        return record


@pytest.fixture
def interleaving_store():
    return InterleavingAccountStore()
