"""Repository for the referees feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matchday_service.core.database import BaseRepository
from matchday_service.features.referees.models import Referee

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class RefereeRepository(BaseRepository[Referee]):
    def __init__(self) -> None:
        super().__init__(Referee)

    async def find_by_club(self, session: AsyncSession, club: str) -> Sequence[Referee]:
        return await self.find(session, Referee.club == club)


_referee_repository: RefereeRepository | None = None


def get_referee_repository() -> RefereeRepository:
    global _referee_repository
    if _referee_repository is None:
        _referee_repository = RefereeRepository()
    return _referee_repository
