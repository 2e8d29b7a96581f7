"""Repository layer for data access."""

from postsmith.repositories.account_store import (
    AccountStore,
    InMemoryAccountStore,
    SqlAccountStore,
)
from postsmith.repositories.history_store import (
    HistoryStore,
    InMemoryHistoryStore,
    SqlHistoryStore,
)

__all__ = [
    "AccountStore",
    "InMemoryAccountStore",
    "SqlAccountStore",
    "HistoryStore",
    "InMemoryHistoryStore",
    "SqlHistoryStore",
]
