"""Commands of the availabilities service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matchday_service.core.events import AvailabilityDeclaredEvent, AvailabilityWithdrawnEvent
from matchday_service.core.exceptions import InvalidStateException
from matchday_service.core.services import BaseService
from matchday_service.features.availabilities.models import Availability
from matchday_service.features.availabilities.repository import (
    AvailabilityRepository,
    get_availability_repository,
)

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from matchday_service.infra.external.resolvers import Resolvers


class AvailabilityService(BaseService):
    """Records which referees can officiate which fixtures."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        resolvers: Resolvers,
        repository: AvailabilityRepository | None = None,
    ) -> None:
        super().__init__(session_factory)
        self._resolvers = resolvers
        self._repository = repository or get_availability_repository()

    async def declare_availability(self, fixture_id: uuid.UUID, referee_id: uuid.UUID) -> None:
        """Record availability and publish AvailabilityDeclared.

        Raises:
            ResolutionException: Fixture or referee cannot be resolved.
            InvalidStateException: Availability was already declared.
        """
        fixture = await self._resolvers.fixtures.resolve(fixture_id)
        referee = await self._resolvers.referees.resolve(referee_id)

        async with self.unit_of_work() as uow:
            if await self._repository.lookup(uow.session, fixture.id, referee.id) is not None:
                raise InvalidStateException(
                    f"Referee {referee.id} already declared availability for fixture {fixture.id}",
                    type="availability-already-declared",
                    extra={"fixture_id": str(fixture.id), "referee_id": str(referee.id)},
                )
            await self._repository.create(uow.session, Availability(fixture_id=fixture.id, referee_id=referee.id))
            await uow.publish(AvailabilityDeclaredEvent(fixture_id=fixture.id, referee_id=referee.id))

        self.logger.info(
            "Availability declared",
            extra={"fixture_id": str(fixture_id), "referee_id": str(referee_id)},
        )

    async def withdraw_availability(self, fixture_id: uuid.UUID, referee_id: uuid.UUID) -> None:
        """Remove availability and publish AvailabilityWithdrawn.

        Raises:
            ResolutionException: Fixture or referee cannot be resolved.
            InvalidStateException: No availability was declared.
        """
        fixture = await self._resolvers.fixtures.resolve(fixture_id)
        referee = await self._resolvers.referees.resolve(referee_id)

        async with self.unit_of_work() as uow:
            availability = await self._repository.lookup(uow.session, fixture.id, referee.id)
            if availability is None:
                raise InvalidStateException(
                    f"Referee {referee.id} has not declared availability for fixture {fixture.id}",
                    type="availability-not-declared",
                    extra={"fixture_id": str(fixture.id), "referee_id": str(referee.id)},
                )
            await self._repository.delete(uow.session, availability)
            await uow.publish(AvailabilityWithdrawnEvent(fixture_id=fixture.id, referee_id=referee.id))

    async def list_for_referee(self, referee_id: uuid.UUID) -> list[uuid.UUID]:
        """Fixture ids the referee declared availability for."""
        async with self.unit_of_work() as uow:
            rows = await self._repository.find_for_referee(uow.session, referee_id)
        return [row.fixture_id for row in rows]


__all__ = ["AvailabilityService"]
