"""Inbox table used to deduplicate redelivered events."""

from __future__ import annotations

from datetime import datetime
import uuid

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from matchday_service.core.database.base import Base, CreatedAtMixin


class InboxRecord(Base, CreatedAtMixin):
    """An event sighted by one consuming instance.

    The row is inserted on first sighting with ``processed_at`` null and
    updated exactly once, in the same transaction as the callback handler,
    to stamp ``processed_at``. Rows are never deleted.

    Attributes:
        id: Event id (shared with the producer's outbox row)
        instance: Consumer identity; replicas of one service share it
        event_type: Event type, when the payload could be decoded far enough
        payload: Raw string-encoded event as received
        processed_at: When the handler completed; null means "not done"
    """

    __tablename__ = "domain_events_inbox"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    instance: Mapped[str] = mapped_column(String(100), primary_key=True)
    event_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @property
    def is_processed(self) -> bool:
        return self.processed_at is not None

    def __repr__(self) -> str:
        return f"<InboxRecord(id={self.id}, instance={self.instance}, processed_at={self.processed_at})>"
