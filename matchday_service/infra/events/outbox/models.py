"""Outbox table for the transactional outbox pattern.

Rows are written in the same transaction as the state change that produced
the event and are never updated afterwards. An external change-data-capture
relay reads the table and ships each row to the broker at least once.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from matchday_service.core.database.base import Base, CreatedAtMixin


class OutboxRecord(Base, CreatedAtMixin):
    """One domain event awaiting relay.

    Attributes:
        id: Event id; also the id consumers deduplicate on
        event_type: Event type identifier (e.g., "assignment.first_referee_assigned")
        payload: JSON-serialized event, including ``event_type``
        aggregate_type: Aggregate the event belongs to (e.g., "fixture")
        aggregate_id: Aggregate id; the relay uses it as the partition/routing key
        correlation_id: Optional id shared by events from one command
    """

    __tablename__ = "domain_events_outbox"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    aggregate_type: Mapped[str] = mapped_column(String(50), nullable=False)
    aggregate_id: Mapped[str] = mapped_column(String(100), nullable=False)
    correlation_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    __table_args__ = (
        Index("ix_domain_events_outbox_created_at", "created_at"),
        Index("ix_domain_events_outbox_aggregate", "aggregate_type", "aggregate_id"),
    )

    def __repr__(self) -> str:
        return f"<OutboxRecord(id={self.id}, type={self.event_type}, aggregate={self.aggregate_id})>"
