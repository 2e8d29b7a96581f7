"""Account model: usage counters and brand profile per identity."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, Integer, String, Text, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column

from postsmith.database import Base


class Account(Base):
    """Usage record for an identity verified by the identity provider."""

    __tablename__ = "accounts"

    # Identity provider subject
    identity: Mapped[str] = mapped_column(String(255), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), server_default="")
    email: Mapped[str] = mapped_column(String(255), server_default="", index=True)

    # Usage counters
    daily_generations: Mapped[int] = mapped_column(Integer, server_default="0")
    total_generations: Mapped[int] = mapped_column(Integer, server_default="0")
    last_reset_date: Mapped[date | None] = mapped_column(Date)
    cooldown_until: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True))

    # Optimistic concurrency token for usage writes
    version: Mapped[int] = mapped_column(Integer, server_default="0")

    # Brand profile
    display_name: Mapped[str] = mapped_column(Text, server_default="")
    bio: Mapped[str] = mapped_column(Text, server_default="")
    writing_style: Mapped[str] = mapped_column(Text, server_default="")
    target_audience: Mapped[str] = mapped_column(Text, server_default="")

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return (
            f"<Account(identity='{self.identity}', daily={self.daily_generations}, "
            f"total={self.total_generations}, version={self.version})>"
        )
