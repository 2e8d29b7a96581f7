"""Factory functions for business logic services."""

from dataclasses import dataclass

from postsmith.clients.base_llm_client import BaseLLMClient
from postsmith.clients.upstream_client import UpstreamClient
from postsmith.config import Settings
from postsmith.factories.client_factories import get_llm_client, get_upstream_client
from postsmith.policy import UsagePolicy
from postsmith.repositories import (
    InMemoryAccountStore,
    InMemoryHistoryStore,
    SqlAccountStore,
    SqlHistoryStore,
)
from postsmith.repositories.account_store import AccountStore
from postsmith.repositories.history_store import HistoryStore
from postsmith.services.dashboard_service import DashboardService
from postsmith.services.generation_service import GenerationService
from postsmith.services.guest_quota import GuestQuotaTracker
from postsmith.services.history_service import HistoryService
from postsmith.services.rate_limiter import RequestRateLimiter
from postsmith.services.response_cache import ResponseCache
from postsmith.services.usage_ledger import AccountUsageLedger
from postsmith.services.validation import SanitizationValidator
from postsmith.utils.clock import Clock, utc_now
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


@dataclass
class Components:
    """Process-wide service graph, built once at startup and kept on ``app.state``.

    The cache, guest tracker and rate limiter hold per-instance state.
    """

    llm: BaseLLMClient
    upstream: UpstreamClient
    cache: ResponseCache
    guest_tracker: GuestQuotaTracker
    ledger: AccountUsageLedger
    history: HistoryService
    generation: GenerationService
    dashboard: DashboardService
    validator: SanitizationValidator
    rate_limiter: RequestRateLimiter


def get_stores(settings: Settings) -> tuple[AccountStore, HistoryStore]:
    """Select account and history stores for the configured backend."""
    if settings.store_backend == "memory":
        return InMemoryAccountStore(), InMemoryHistoryStore()

    from postsmith.database import get_session_factory

    session_factory = get_session_factory()
    return SqlAccountStore(session_factory), SqlHistoryStore(session_factory)


def build_components(
    settings: Settings,
    llm: BaseLLMClient | None = None,
    account_store: AccountStore | None = None,
    history_store: HistoryStore | None = None,
    clock: Clock = utc_now,
) -> Components:
    """
    Wire every service from settings.

    Args:
        settings: Application settings
        llm: Override for the LLM client (tests pass a mock)
        account_store: Override for the account store
        history_store: Override for the history store
        clock: Time source shared by every time-dependent component

    Returns:
        Components instance
    """
    if account_store is None or history_store is None:
        default_accounts, default_history = get_stores(settings)
        if account_store is None:
            account_store = default_accounts
        if history_store is None:
            history_store = default_history

    policy = UsagePolicy.from_settings(settings)
    if llm is None:
        llm = get_llm_client(settings)
    upstream = get_upstream_client(settings, llm)

    validator = SanitizationValidator()
    cache = ResponseCache(upstream, ttl_seconds=policy.cache_ttl_seconds, clock=clock)
    guest_tracker = GuestQuotaTracker(limit=policy.guest_daily_limit, clock=clock)
    ledger = AccountUsageLedger(account_store, policy=policy, clock=clock)
    history = HistoryService(history_store, max_items=policy.max_history_items, clock=clock)

    log.info(
        "components built",
        store_backend=settings.store_backend,
        model=settings.llm_model,
        daily_limit=policy.daily_limit,
        cooldown_seconds=policy.cooldown_seconds,
    )

    return Components(
        llm=llm,
        upstream=upstream,
        cache=cache,
        guest_tracker=guest_tracker,
        ledger=ledger,
        history=history,
        generation=GenerationService(
            validator=validator,
            cache=cache,
            upstream=upstream,
            guest_tracker=guest_tracker,
            ledger=ledger,
            history=history,
            clock=clock,
        ),
        dashboard=DashboardService(ledger, history),
        validator=validator,
        rate_limiter=RequestRateLimiter(requests_per_minute=settings.requests_per_minute),
    )
