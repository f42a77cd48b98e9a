"""Outbox store: append events inside the caller's transaction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from matchday_service.core.database.repository import BaseRepository
from matchday_service.infra.events.outbox.models import OutboxRecord

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from matchday_service.core.events.base import DomainEvent

logger = logging.getLogger(__name__)


class OutboxStore(BaseRepository[OutboxRecord]):
    """Insert-only access to ``domain_events_outbox``.

    The store exposes no read API; the relay reads the table itself. The
    store flushes immediately so a storage failure surfaces at the call site
    and aborts the enclosing transaction together with the business write.
    """

    def __init__(self) -> None:
        super().__init__(OutboxRecord)

    async def store(self, session: AsyncSession, event: DomainEvent) -> OutboxRecord:
        """Append ``event`` to the outbox in ``session``'s transaction.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: On any storage failure; the caller's
                unit of work turns it into a rollback.
        """
        record = OutboxRecord(
            id=event.event_id,
            event_type=event.event_type,
            payload=event.to_json(),
            aggregate_type=event.aggregate_type,
            aggregate_id=event.aggregate_id,
            correlation_id=event.correlation_id,
        )
        session.add(record)
        await session.flush()

        logger.info(
            "Event stored in outbox",
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_type": event.aggregate_type,
                "aggregate_id": event.aggregate_id,
            },
        )
        return record


_outbox_store: OutboxStore | None = None


def get_outbox_store() -> OutboxStore:
    """Get the shared OutboxStore instance."""
    global _outbox_store
    if _outbox_store is None:
        _outbox_store = OutboxStore()
    return _outbox_store
