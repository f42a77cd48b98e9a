"""Inbox deduplication: table model and store."""

from matchday_service.infra.events.inbox.models import InboxRecord
from matchday_service.infra.events.inbox.repository import InboxStore, get_inbox_store

__all__ = ["InboxRecord", "InboxStore", "get_inbox_store"]
