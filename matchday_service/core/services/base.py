"""Base service class for command handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from matchday_service.infra.database.unit_of_work import UnitOfWork
from matchday_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class BaseService:
    """Base class for all feature services.

    A service owns no session of its own. Each command opens a fresh
    ``UnitOfWork`` from the session factory, so the business write and its
    outbox row commit or roll back together.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR (always evaluated)
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class VenueService(BaseService):
            async def create_venue(self, name: str) -> Venue:
                async with self.unit_of_work() as uow:
                    venue = await self._repository.create(uow.session, Venue(name=name))
                    await uow.publish(VenueCreatedEvent(venue_id=venue.id))
                return venue
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        class_name = self.__class__.__name__
        self._session_factory = session_factory
        self.logger = logging.getLogger(class_name)
        self._lazy = get_lazy_logger(class_name)

    def unit_of_work(self) -> UnitOfWork:
        """Create a new, not yet begun, unit of work."""
        return UnitOfWork(self._session_factory)
