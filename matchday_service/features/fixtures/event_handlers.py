"""Domain event callbacks of the fixtures service.

The assignments service announces committed and removed assignments; this
handler mirrors them into the fixture's referee slots. Both directions are
idempotent, so a redelivery after a partial failure is harmless. Every
change to a fixture drops the shared ``fixture_{id}`` cache entry so the next
resolve sees it. Slot changes drop it a second time after the consumer
commits.
"""

from __future__ import annotations

from functools import partial
import logging
from typing import TYPE_CHECKING

from matchday_service.core.events import (
    FirstRefereeAssignedEvent,
    FirstRefereeAssignmentRemovedEvent,
    FixtureCancelledEvent,
    FixtureDateChangedEvent,
    FixtureVenueChangedEvent,
    SecondRefereeAssignedEvent,
    SecondRefereeAssignmentRemovedEvent,
)
from matchday_service.features.fixtures.repository import FixtureRepository, get_fixture_repository

if TYPE_CHECKING:
    import uuid

    from matchday_service.core.events import DomainEvent, RefereeSlotEvent, TransactionalPublisher
    from matchday_service.infra.external.resolvers import FixtureResolver

logger = logging.getLogger(__name__)


class FixtureEventHandler:
    def __init__(
        self,
        fixture_resolver: FixtureResolver,
        repository: FixtureRepository | None = None,
    ) -> None:
        self._fixtures = fixture_resolver
        self._repository = repository or get_fixture_repository()

    async def handle(self, event: DomainEvent, uow: TransactionalPublisher) -> None:
        match event:
            case FirstRefereeAssignedEvent() | SecondRefereeAssignedEvent():
                await self._on_referee_assigned(event, uow)
            case FirstRefereeAssignmentRemovedEvent() | SecondRefereeAssignmentRemovedEvent():
                await self._on_referee_removed(event, uow)
            case FixtureDateChangedEvent() | FixtureVenueChangedEvent() | FixtureCancelledEvent():
                await self._fixtures.invalidate(event.fixture_id)
            case _:
                logger.info("Received domain event", extra={"event": str(event)})

    async def _on_referee_assigned(self, event: RefereeSlotEvent, uow: TransactionalPublisher) -> None:
        fixture = await self._repository.get_or_raise(uow.session, event.fixture_id)
        if fixture.assign_referee(event.slot, event.referee_id):
            await uow.session.flush()
            logger.info(
                "Referee assigned to fixture",
                extra={"fixture_id": str(fixture.id), "slot": event.slot, "referee_id": str(event.referee_id)},
            )
        else:
            logger.info(
                "Referee already holds slot; nothing to do",
                extra={"fixture_id": str(fixture.id), "slot": event.slot},
            )
        await self._invalidate_slots(fixture.id, uow)

    async def _on_referee_removed(self, event: RefereeSlotEvent, uow: TransactionalPublisher) -> None:
        fixture = await self._repository.get_or_raise(uow.session, event.fixture_id)
        if fixture.remove_referee(event.slot, event.referee_id):
            await uow.session.flush()
            logger.info(
                "Referee removed from fixture",
                extra={"fixture_id": str(fixture.id), "slot": event.slot, "referee_id": str(event.referee_id)},
            )
        else:
            logger.info(
                "Referee does not hold slot; nothing to do",
                extra={
                    "fixture_id": str(fixture.id),
                    "slot": event.slot,
                    "held_by": str(fixture.referee_in_slot(event.slot)),
                },
            )
        await self._invalidate_slots(fixture.id, uow)

    async def _invalidate_slots(self, fixture_id: uuid.UUID, uow: TransactionalPublisher) -> None:
        # a resolve racing this transaction refills the key from the last
        # committed row, so the entry is dropped again once the slot is visible
        await self._fixtures.invalidate(fixture_id)
        uow.after_commit(partial(self._fixtures.invalidate, fixture_id))
