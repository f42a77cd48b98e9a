"""Callback handler contract used by the domain event consumer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from matchday_service.core.events.base import DomainEvent
    from matchday_service.core.events.publisher import TransactionalPublisher


@runtime_checkable
class DomainEventHandler(Protocol):
    """One service's reaction to the closed set of catalog events.

    ``handle`` runs inside the consumer's transaction: everything it writes
    through ``uow.session`` (and anything it publishes) commits together with
    the inbox ``processed_at`` marker. Implementations must tolerate being
    called twice with the same event and must let errors propagate; the
    consumer turns them into a rollback and a redelivery.
    """

    async def handle(self, event: DomainEvent, uow: TransactionalPublisher) -> None: ...


class LoggingEventHandler:
    """Handler for services that react to no catalog event: log and move on."""

    def __init__(self, service: str) -> None:
        self._logger = logging.getLogger(f"{__name__}.{service}")

    async def handle(self, event: DomainEvent, uow: TransactionalPublisher) -> None:
        self._logger.info("Received domain event", extra={"event": str(event)})
