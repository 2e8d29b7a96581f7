"""Per-account usage ledger: daily quota, lifetime count and cooldown.

Two layers of checks guard each generation:

* ``check_cooldown`` / ``check_daily_limit`` run on a plain read before any
  upstream work, so obviously denied requests fail fast.
* ``increment_atomic`` re-checks both inside an optimistic transaction against
  the store. It is the only authority: two concurrent requests may both pass
  the advisory checks, but at most the remaining quota can commit.
"""

from __future__ import annotations

import math
from datetime import timedelta

from postsmith.exceptions import (
    CooldownActiveError,
    DailyLimitExceededError,
    TooManyRequestsError,
    UserNotFoundError,
)
from postsmith.policy import DEFAULT_POLICY, UsagePolicy
from postsmith.records import AccountRecord, BrandProfile, UsageUpdate
from postsmith.repositories.account_store import AccountStore
from postsmith.utils.clock import Clock, today, utc_now
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


class AccountUsageLedger:
    """Reads, checks and atomically increments account usage records."""

    def __init__(
        self,
        store: AccountStore,
        policy: UsagePolicy = DEFAULT_POLICY,
        clock: Clock = utc_now,
        max_transaction_attempts: int = 10,
    ):
        self.store = store
        self.policy = policy
        self._clock = clock
        self._max_attempts = max_transaction_attempts

    @property
    def daily_limit(self) -> int:
        return self.policy.daily_limit

    async def read_or_create(self, identity: str, name: str = "", email: str = "") -> AccountRecord:
        """Return the record for ``identity`` with today's lazy reset applied.

        Creates a zeroed record on first sight of the identity.
        """
        record = await self.store.get(identity)
        if record is None:
            record = await self.store.insert_if_absent(
                AccountRecord(
                    identity=identity,
                    name=name,
                    email=email,
                    last_reset_date=today(self._clock),
                    created_at=self._clock(),
                )
            )
        return await self._apply_lazy_reset(record)

    async def get(self, identity: str) -> AccountRecord:
        """Like ``read_or_create`` but a missing record is an integrity fault."""
        record = await self.store.get(identity)
        if record is None:
            log.error("account record missing", identity=identity)
            raise UserNotFoundError(identity)
        return await self._apply_lazy_reset(record)

    async def _apply_lazy_reset(self, record: AccountRecord) -> AccountRecord:
        current_day = today(self._clock)
        for _ in range(self._max_attempts):
            if record.last_reset_date == current_day:
                return record
            updated = await self.store.compare_and_swap(
                record.identity,
                record.version,
                UsageUpdate(
                    daily_generations=0,
                    total_generations=record.total_generations,
                    last_reset_date=current_day,
                    cooldown_until=record.cooldown_until,
                ),
            )
            if updated is not None:
                log.info("daily usage reset", identity=record.identity, day=current_day.isoformat())
                return updated
            reread = await self.store.get(record.identity)
            if reread is None:
                raise UserNotFoundError(record.identity)
            record = reread
        raise TooManyRequestsError("Usage update contention. Please retry.", retry_after=1)

    def check_cooldown(self, record: AccountRecord) -> None:
        now = self._clock()
        until = record.cooldown_until
        if until is not None and until > now:
            remaining = math.ceil((until - now).total_seconds())
            raise CooldownActiveError(seconds_remaining=max(remaining, 1))

    def check_daily_limit(self, record: AccountRecord) -> None:
        if record.daily_generations >= self.policy.daily_limit:
            raise DailyLimitExceededError(
                used=record.daily_generations, limit=self.policy.daily_limit
            )

    async def increment_atomic(self, identity: str) -> AccountRecord:
        """Count one generation. Re-checks cooldown and daily limit in the transaction.

        Raises:
            UserNotFoundError: No record for ``identity``
            DailyLimitExceededError: Limit reached, even if the advisory check passed
            CooldownActiveError: A concurrent request committed first and quota remains
            TooManyRequestsError: Lost the race ``max_transaction_attempts`` times
        """
        for attempt in range(1, self._max_attempts + 1):
            current = await self.store.get(identity)
            if current is None:
                log.error("account record missing on increment", identity=identity)
                raise UserNotFoundError(identity)

            now = self._clock()
            current_day = today(self._clock)
            daily = current.daily_generations if current.last_reset_date == current_day else 0

            # Limit before cooldown: a racer that lost the last slot reports the limit
            if daily >= self.policy.daily_limit:
                log.info("daily limit hit in transaction", identity=identity, used=daily)
                raise DailyLimitExceededError(used=daily, limit=self.policy.daily_limit)
            self.check_cooldown(current)

            updated = await self.store.compare_and_swap(
                identity,
                current.version,
                UsageUpdate(
                    daily_generations=daily + 1,
                    total_generations=current.total_generations + 1,
                    last_reset_date=current_day,
                    cooldown_until=now + timedelta(seconds=self.policy.cooldown_seconds),
                ),
            )
            if updated is not None:
                log.info(
                    "usage incremented",
                    identity=identity,
                    daily=updated.daily_generations,
                    total=updated.total_generations,
                )
                return updated

            log.debug("usage transaction conflict", identity=identity, attempt=attempt)

        log.warning("usage transaction gave up", identity=identity, attempts=self._max_attempts)
        raise TooManyRequestsError("Usage update contention. Please retry.", retry_after=1)

    async def save_profile(
        self, identity: str, profile: BrandProfile, name: str = "", email: str = ""
    ) -> BrandProfile:
        """Upsert the brand profile. Usage fields are untouched."""
        await self.read_or_create(identity, name=name, email=email)
        await self.store.save_profile(identity, profile)
        log.info("brand profile updated", identity=identity)
        return profile
