"""Transactional outbox: table model and insert-only store."""

from matchday_service.infra.events.outbox.models import OutboxRecord
from matchday_service.infra.events.outbox.repository import OutboxStore, get_outbox_store

__all__ = ["OutboxRecord", "OutboxStore", "get_outbox_store"]
