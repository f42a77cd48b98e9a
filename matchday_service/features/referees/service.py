"""Commands and read model of the referees service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matchday_service.core.events import RefereeClubChangedEvent, RefereeCreatedEvent
from matchday_service.core.exceptions import ValidationException
from matchday_service.core.services import BaseService
from matchday_service.features.referees.models import Referee
from matchday_service.features.referees.repository import RefereeRepository, get_referee_repository
from matchday_service.infra.external.schemas import RefereeDTO

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class RefereeService(BaseService):
    """Registers referees and tracks their club."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repository: RefereeRepository | None = None,
    ) -> None:
        super().__init__(session_factory)
        self._repository = repository or get_referee_repository()

    async def create_referee(self, name: str, club: str) -> RefereeDTO:
        """Register a referee and publish RefereeCreated."""
        if not name.strip() or not club.strip():
            raise ValidationException("Referee name and club must not be empty", type="referee-invalid")

        async with self.unit_of_work() as uow:
            referee = await self._repository.create(uow.session, Referee(name=name.strip(), club=club.strip()))
            await uow.publish(RefereeCreatedEvent(referee_id=referee.id))
            dto = RefereeDTO.model_validate(referee, from_attributes=True)

        self.logger.info(
            "Referee created",
            extra={"referee_id": str(dto.id), "operation": "service.create_referee"},
        )
        return dto

    async def change_referee_club(self, referee_id: uuid.UUID, club: str) -> RefereeDTO:
        """Move a referee to another club and publish RefereeClubChanged.

        Raises:
            NotFoundException: Unknown referee.
        """
        club = club.strip()
        if not club:
            raise ValidationException("Club must not be empty", type="referee-invalid")

        async with self.unit_of_work() as uow:
            referee = await self._repository.get_or_raise(uow.session, referee_id)
            if referee.change_club(club):
                await uow.publish(RefereeClubChangedEvent(referee_id=referee.id, club_name=club))
            else:
                self._lazy.debug(lambda: f"service.change_referee_club({referee_id}) -> unchanged")
            dto = RefereeDTO.model_validate(referee, from_attributes=True)
        return dto

    async def get_referee(self, referee_id: uuid.UUID) -> RefereeDTO:
        """Read model served to other services' resolvers."""
        async with self.unit_of_work() as uow:
            referee = await self._repository.get_or_raise(uow.session, referee_id)
            return RefereeDTO.model_validate(referee, from_attributes=True)


__all__ = ["RefereeService"]
