"""Repository for the assignments feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matchday_service.core.database import BaseRepository
from matchday_service.features.assignments.models import Assignment, AssignmentStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession


class AssignmentRepository(BaseRepository[Assignment]):
    def __init__(self) -> None:
        super().__init__(Assignment)

    async def lookup(
        self, session: AsyncSession, fixture_id: uuid.UUID, referee_id: uuid.UUID
    ) -> Assignment | None:
        return await self.get(session, (fixture_id, referee_id))

    async def find_staged(self, session: AsyncSession) -> Sequence[Assignment]:
        return await self.find(session, Assignment.status == AssignmentStatus.STAGED)

    async def find_all(self, session: AsyncSession) -> Sequence[Assignment]:
        return await self.find(session)


_assignment_repository: AssignmentRepository | None = None


def get_assignment_repository() -> AssignmentRepository:
    global _assignment_repository
    if _assignment_repository is None:
        _assignment_repository = AssignmentRepository()
    return _assignment_repository
