"""Repository for the availabilities feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matchday_service.core.database import BaseRepository
from matchday_service.features.availabilities.models import Availability

if TYPE_CHECKING:
    from collections.abc import Sequence
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession


class AvailabilityRepository(BaseRepository[Availability]):
    def __init__(self) -> None:
        super().__init__(Availability)

    async def lookup(
        self, session: AsyncSession, fixture_id: uuid.UUID, referee_id: uuid.UUID
    ) -> Availability | None:
        return await self.get(session, (fixture_id, referee_id))

    async def find_for_referee(self, session: AsyncSession, referee_id: uuid.UUID) -> Sequence[Availability]:
        return await self.find(session, Availability.referee_id == referee_id)


_availability_repository: AvailabilityRepository | None = None


def get_availability_repository() -> AvailabilityRepository:
    global _availability_repository
    if _availability_repository is None:
        _availability_repository = AvailabilityRepository()
    return _availability_repository
