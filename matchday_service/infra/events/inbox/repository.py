"""Inbox store: sightings and processed markers for consumed events."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matchday_service.core.database.base import utcnow
from matchday_service.core.database.repository import BaseRepository
from matchday_service.infra.events.inbox.models import InboxRecord

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession


class InboxStore(BaseRepository[InboxRecord]):
    """Read/append/mark access to ``domain_events_inbox``."""

    def __init__(self) -> None:
        super().__init__(InboxRecord)

    async def lookup(self, session: AsyncSession, event_id: uuid.UUID, instance: str) -> InboxRecord | None:
        """Return this instance's row for ``event_id``, if any."""
        return await self.get(session, (event_id, instance))

    async def record_sighting(
        self,
        session: AsyncSession,
        *,
        event_id: uuid.UUID,
        instance: str,
        payload: str,
        event_type: str | None = None,
    ) -> InboxRecord:
        """Insert a not-yet-processed row for ``event_id``."""
        record = InboxRecord(
            id=event_id,
            instance=instance,
            event_type=event_type,
            payload=payload,
            processed_at=None,
        )
        return await self.create(session, record)

    async def mark_processed(self, session: AsyncSession, record: InboxRecord) -> InboxRecord:
        """Stamp ``processed_at``; must run in the handler's transaction."""
        record.processed_at = utcnow()
        await session.flush()
        self._lazy.debug(lambda: f"inbox.mark_processed: {record!r}")
        return record


_inbox_store: InboxStore | None = None


def get_inbox_store() -> InboxStore:
    """Get the shared InboxStore instance."""
    global _inbox_store
    if _inbox_store is None:
        _inbox_store = InboxStore()
    return _inbox_store
