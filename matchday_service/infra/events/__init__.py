"""Domain event infrastructure: outbox, inbox and the callback contract.

The consumer lives in ``matchday_service.infra.events.consumer``; it depends
on the unit of work, which itself depends on the outbox store, so it is not
re-exported here.
"""

from matchday_service.infra.events.handlers import DomainEventHandler, LoggingEventHandler
from matchday_service.infra.events.inbox import InboxRecord, InboxStore, get_inbox_store
from matchday_service.infra.events.outbox import OutboxRecord, OutboxStore, get_outbox_store

__all__ = [
    "DomainEventHandler",
    "LoggingEventHandler",
    "InboxRecord",
    "InboxStore",
    "OutboxRecord",
    "OutboxStore",
    "get_inbox_store",
    "get_outbox_store",
]
