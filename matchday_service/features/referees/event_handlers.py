"""Domain event callbacks of the referees service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from matchday_service.core.events import RefereeClubChangedEvent

if TYPE_CHECKING:
    from matchday_service.core.events import DomainEvent, TransactionalPublisher
    from matchday_service.infra.external.resolvers import RefereeResolver

logger = logging.getLogger(__name__)


class RefereeEventHandler:
    """Keeps the shared referee cache coherent with club changes."""

    def __init__(self, referee_resolver: RefereeResolver) -> None:
        self._referees = referee_resolver

    async def handle(self, event: DomainEvent, uow: TransactionalPublisher) -> None:
        match event:
            case RefereeClubChangedEvent(referee_id=referee_id, club_name=club_name):
                await self._referees.invalidate(referee_id)
                logger.info(
                    "Referee club changed; cache entry dropped",
                    extra={"referee_id": str(referee_id), "club_name": club_name},
                )
            case _:
                logger.info("Received domain event", extra={"event": str(event)})
