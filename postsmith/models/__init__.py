"""Database models."""

from postsmith.models.account import Account
from postsmith.models.history_entry import HistoryEntry

__all__ = [
    "Account",
    "HistoryEntry",
]
