"""Commands and read model of the fixtures service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matchday_service.core.events import (
    FixtureCancelledEvent,
    FixtureCreatedEvent,
    FixtureDateChangedEvent,
    FixtureVenueChangedEvent,
)
from matchday_service.core.exceptions import ConflictException, ValidationException
from matchday_service.core.services import BaseService
from matchday_service.features.fixtures.models import Fixture, as_utc
from matchday_service.features.fixtures.repository import FixtureRepository, get_fixture_repository
from matchday_service.infra.external.schemas import FixtureDTO

if TYPE_CHECKING:
    from datetime import datetime
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from matchday_service.infra.external.resolvers import Resolvers


class FixtureService(BaseService):
    """Schedules fixtures and serves them with references expanded.

    Venues, teams and referees belong to other services and are read
    through the cache-backed resolvers; a failed lookup aborts the command
    with ``ResolutionException``.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        resolvers: Resolvers,
        repository: FixtureRepository | None = None,
    ) -> None:
        super().__init__(session_factory)
        self._resolvers = resolvers
        self._repository = repository or get_fixture_repository()

    async def create_fixture(
        self,
        date: datetime,
        venue_id: uuid.UUID,
        team_home_id: uuid.UUID,
        team_away_id: uuid.UUID,
    ) -> FixtureDTO:
        """Schedule a fixture and publish FixtureCreated.

        Raises:
            ValidationException: Home and away team are the same.
            ResolutionException: Venue or a team cannot be resolved.
            ConflictException: The venue or a team already plays that day.
        """
        if team_home_id == team_away_id:
            raise ValidationException(
                "Team home and team away cannot be the same",
                type="fixture-same-teams",
                extra={"team_id": str(team_home_id)},
            )

        venue = await self._resolvers.venues.resolve(venue_id)
        team_home = await self._resolvers.teams.resolve(team_home_id)
        team_away = await self._resolvers.teams.resolve(team_away_id)
        date = as_utc(date)

        async with self.unit_of_work() as uow:
            if await self._repository.find_on_day_at_venue(uow.session, date, venue_id):
                raise ConflictException(
                    "There is already a fixture at the same venue on the same day",
                    type="fixture-venue-clash",
                    extra={"venue_id": str(venue_id), "date": date.date().isoformat()},
                )
            for side, team_id in (("home", team_home_id), ("away", team_away_id)):
                if await self._repository.find_on_day_for_team(uow.session, date, team_id):
                    raise ConflictException(
                        f"There is already a fixture on the same day for the {side} team",
                        type="fixture-team-clash",
                        extra={"team_id": str(team_id), "date": date.date().isoformat()},
                    )

            fixture = await self._repository.create(
                uow.session,
                Fixture(
                    date=date,
                    venue_id=venue_id,
                    team_home_id=team_home_id,
                    team_away_id=team_away_id,
                ),
            )
            await uow.publish(FixtureCreatedEvent(fixture_id=fixture.id))

        self.logger.info(
            "Fixture created",
            extra={"fixture_id": str(fixture.id), "operation": "service.create_fixture"},
        )
        return FixtureDTO(
            id=fixture.id,
            date=fixture.date,
            status=fixture.status,
            venue=venue,
            team_home=team_home,
            team_away=team_away,
        )

    async def change_fixture_date(self, fixture_id: uuid.UUID, date: datetime) -> None:
        """Move a fixture and publish FixtureDateChanged.

        Raises:
            NotFoundException: Unknown fixture.
        """
        async with self.unit_of_work() as uow:
            fixture = await self._repository.get_or_raise(uow.session, fixture_id)
            fixture.change_date(date)
            await uow.publish(FixtureDateChangedEvent(fixture_id=fixture.id, date=fixture.date))

    async def change_fixture_venue(self, fixture_id: uuid.UUID, venue_id: uuid.UUID) -> None:
        """Move a fixture to another venue and publish FixtureVenueChanged.

        Raises:
            NotFoundException: Unknown fixture.
            ResolutionException: The venue cannot be resolved.
        """
        async with self.unit_of_work() as uow:
            fixture = await self._repository.get_or_raise(uow.session, fixture_id)
            await self._resolvers.venues.resolve(venue_id)
            fixture.change_venue(venue_id)
            await uow.publish(FixtureVenueChangedEvent(fixture_id=fixture.id, venue_id=venue_id))

    async def cancel_fixture(self, fixture_id: uuid.UUID) -> None:
        """Cancel a fixture and publish FixtureCancelled.

        Raises:
            NotFoundException: Unknown fixture.
            InvalidStateException: Already cancelled.
        """
        async with self.unit_of_work() as uow:
            fixture = await self._repository.get_or_raise(uow.session, fixture_id)
            fixture.cancel()
            await uow.publish(FixtureCancelledEvent(fixture_id=fixture.id))

        self.logger.info(
            "Fixture cancelled",
            extra={"fixture_id": str(fixture_id), "operation": "service.cancel_fixture"},
        )

    async def get_fixture(self, fixture_id: uuid.UUID) -> FixtureDTO:
        """Read model served to other services' fixture resolvers.

        Raises:
            NotFoundException: Unknown fixture.
            ResolutionException: A referenced aggregate cannot be resolved.
        """
        async with self.unit_of_work() as uow:
            fixture = await self._repository.get_or_raise(uow.session, fixture_id)

        first = fixture.first_referee_id
        second = fixture.second_referee_id
        return FixtureDTO(
            id=fixture.id,
            date=fixture.date,
            status=fixture.status,
            venue=await self._resolvers.venues.resolve(fixture.venue_id),
            team_home=await self._resolvers.teams.resolve(fixture.team_home_id),
            team_away=await self._resolvers.teams.resolve(fixture.team_away_id),
            first_referee=await self._resolvers.referees.resolve(first) if first else None,
            second_referee=await self._resolvers.referees.resolve(second) if second else None,
        )


__all__ = ["FixtureService"]
