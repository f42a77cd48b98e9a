"""Minimal generic repository for SQLAlchemy models.

Provides basic persistence operations with explicit session passing. The
session belongs to the caller's unit of work; repositories never commit.

Example:
    class RefereeRepository(BaseRepository[Referee]):
        async def find_by_club(self, session: AsyncSession, club: str) -> Sequence[Referee]:
            return await self.find(session, Referee.club == club)

    referee = await referee_repo.get_or_raise(session, referee_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from matchday_service.core.exceptions import NotFoundException
from matchday_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository[T]:
    """Generic repository with the handful of operations every aggregate needs.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundException)
        - find(session, *criteria) -> Sequence[T]
        - create(session, instance) -> T
        - save(session, instance) -> T (insert-or-update by primary key)
        - delete(session, instance) -> None

    ``id`` may be a scalar or, for composite keys, a tuple in primary key
    column order.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Get entity by primary key."""
        instance = await session.get(self.model, id)
        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(self, session: AsyncSession, id: Any) -> T:  # noqa: A002
        """Get entity by primary key or raise NotFoundException.

        Raises:
            NotFoundException: If entity doesn't exist
        """
        instance = await self.get(session, id)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={"entity": self.model.__name__, "id": str(id), "operation": "db.get_or_raise"},
            )
            raise NotFoundException(
                detail=f"{self.model.__name__} {id} not found",
                type=f"{self.model.__name__.lower()}-not-found",
                extra={"entity": self.model.__name__, "id": str(id)},
            )
        return instance

    async def find(self, session: AsyncSession, *criteria: Any) -> Sequence[T]:
        """List entities matching all ``criteria`` (SQLAlchemy expressions)."""
        stmt = select(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        result = await session.execute(stmt)
        items = result.scalars().all()
        self._lazy.debug(lambda: f"db.find: {self.model.__name__} -> {len(items)} items")
        return items

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity and flush so generated values are populated."""
        session.add(instance)
        await session.flush()

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def save(self, session: AsyncSession, instance: T) -> T:
        """Insert or overwrite an entity by primary key.

        Returns the persistent instance attached to ``session``, which may
        differ from the one passed in.
        """
        merged = await session.merge(instance)
        await session.flush()
        self._lazy.debug(lambda: f"db.save: {self.model.__name__} -> {merged!r}")
        return merged

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete an entity."""
        await session.delete(instance)
        await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "entity_repr": repr(instance), "operation": "db.delete"},
        )
