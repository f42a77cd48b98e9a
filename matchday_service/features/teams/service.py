"""Commands and read model of the teams service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matchday_service.core.events import TeamCreatedEvent
from matchday_service.core.exceptions import ValidationException
from matchday_service.core.services import BaseService
from matchday_service.features.teams.models import Team
from matchday_service.features.teams.repository import TeamRepository, get_team_repository
from matchday_service.infra.external.schemas import TeamDTO

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class TeamService(BaseService):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repository: TeamRepository | None = None,
    ) -> None:
        super().__init__(session_factory)
        self._repository = repository or get_team_repository()

    async def create_team(self, name: str, club: str) -> TeamDTO:
        """Register a team and publish TeamCreated."""
        if not name.strip() or not club.strip():
            raise ValidationException("Team name and club must not be empty", type="team-invalid")

        async with self.unit_of_work() as uow:
            team = await self._repository.create(uow.session, Team(name=name.strip(), club=club.strip()))
            await uow.publish(TeamCreatedEvent(team_id=team.id))
            dto = TeamDTO.model_validate(team, from_attributes=True)

        self.logger.info("Team created", extra={"team_id": str(dto.id), "operation": "service.create_team"})
        return dto

    async def get_team(self, team_id: uuid.UUID) -> TeamDTO:
        async with self.unit_of_work() as uow:
            team = await self._repository.get_or_raise(uow.session, team_id)
            return TeamDTO.model_validate(team, from_attributes=True)


__all__ = ["TeamService"]
