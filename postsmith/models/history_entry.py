"""History entry model: one row per completed generation."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, String, Text, TIMESTAMP
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from postsmith.database import Base


class HistoryEntry(Base):
    """Stored generation for an account, trimmed to a fixed count per account."""

    __tablename__ = "history_entries"
    __table_args__ = (
        Index("ix_history_entries_account_created", "account_identity", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    account_identity: Mapped[str] = mapped_column(
        String(255), ForeignKey("accounts.identity", ondelete="CASCADE")
    )

    topic: Mapped[str] = mapped_column(Text)
    platform: Mapped[str] = mapped_column(String(32))
    tone: Mapped[str] = mapped_column(String(32))
    language: Mapped[str] = mapped_column(String(32))
    text: Mapped[str] = mapped_column(Text)
    quality: Mapped[dict | None] = mapped_column(JSONB)
    refinement: Mapped[str | None] = mapped_column(String(64))

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True))

    def __repr__(self):
        return f"<HistoryEntry(id='{self.id}', account='{self.account_identity}')>"
