"""Repository for the fixtures feature."""

from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import or_

from matchday_service.core.database import BaseRepository
from matchday_service.features.fixtures.models import Fixture, as_utc
from matchday_service.infra.external.schemas import FixtureStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession


def _day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    moment = as_utc(moment)
    start = datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)
    return start, start + timedelta(days=1)


class FixtureRepository(BaseRepository[Fixture]):
    """Fixture persistence plus the same-day lookups scheduling needs.

    Same-day lookups ignore cancelled fixtures.
    """

    def __init__(self) -> None:
        super().__init__(Fixture)

    async def find_on_day_at_venue(
        self,
        session: AsyncSession,
        moment: datetime,
        venue_id: uuid.UUID,
    ) -> Sequence[Fixture]:
        start, end = _day_bounds(moment)
        return await self.find(
            session,
            Fixture.date >= start,
            Fixture.date < end,
            Fixture.venue_id == venue_id,
            Fixture.status == FixtureStatus.SCHEDULED,
        )

    async def find_on_day_for_team(
        self,
        session: AsyncSession,
        moment: datetime,
        team_id: uuid.UUID,
    ) -> Sequence[Fixture]:
        start, end = _day_bounds(moment)
        return await self.find(
            session,
            Fixture.date >= start,
            Fixture.date < end,
            or_(Fixture.team_home_id == team_id, Fixture.team_away_id == team_id),
            Fixture.status == FixtureStatus.SCHEDULED,
        )


_fixture_repository: FixtureRepository | None = None


def get_fixture_repository() -> FixtureRepository:
    global _fixture_repository
    if _fixture_repository is None:
        _fixture_repository = FixtureRepository()
    return _fixture_repository
