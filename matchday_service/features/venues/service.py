"""Commands and read model of the venues service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from matchday_service.core.events import VenueCreatedEvent
from matchday_service.core.exceptions import ValidationException
from matchday_service.core.services import BaseService
from matchday_service.features.venues.models import Venue
from matchday_service.features.venues.repository import VenueRepository, get_venue_repository
from matchday_service.features.venues.schemas import VenueCreate
from matchday_service.infra.external.schemas import VenueDTO

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class VenueService(BaseService):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repository: VenueRepository | None = None,
    ) -> None:
        super().__init__(session_factory)
        self._repository = repository or get_venue_repository()

    async def create_venue(
        self,
        name: str,
        street: str,
        zip: str,
        city: str,
        telephone: str | None = None,
        email: str | None = None,
    ) -> VenueDTO:
        """Register a venue and publish VenueCreated.

        Raises:
            ValidationException: A required field is empty or too long.
        """
        try:
            payload = VenueCreate(
                name=name, street=street, zip=zip, city=city, telephone=telephone, email=email
            )
        except ValidationError as exc:
            raise ValidationException(
                "Invalid venue",
                type="venue-invalid",
                extra={"errors": exc.errors(include_url=False)},
            ) from exc

        async with self.unit_of_work() as uow:
            venue = await self._repository.create(uow.session, Venue(**payload.model_dump()))
            await uow.publish(VenueCreatedEvent(venue_id=venue.id))
            dto = VenueDTO.model_validate(venue, from_attributes=True)

        self.logger.info(
            "Venue created",
            extra={"venue_id": str(dto.id), "city": dto.city, "operation": "service.create_venue"},
        )
        return dto

    async def get_venue(self, venue_id: uuid.UUID) -> VenueDTO:
        async with self.unit_of_work() as uow:
            venue = await self._repository.get_or_raise(uow.session, venue_id)
            return VenueDTO.model_validate(venue, from_attributes=True)


__all__ = ["VenueService"]
