"""Unit of work: one database transaction plus outbox publishing.

``UnitOfWork`` is the concrete ``TransactionalPublisher``. Commands and
callback handlers receive it by reference, write through ``uow.session`` and
append events with ``uow.publish(event)``; whoever opened the unit decides
when it commits.

Work that must only happen once the data is visible to other connections,
such as dropping a shared cache entry, is registered with
``uow.after_commit(callback)``. Callbacks run in registration order after
a successful commit and are discarded on rollback.

Example:
    async with UnitOfWork(session_factory) as uow:
        fixture = await fixture_repo.get_or_raise(uow.session, fixture_id)
        fixture.cancel()
        await uow.publish(FixtureCancelledEvent(fixture_id=fixture.id))
    # committed here; any exception inside the block rolls back both writes
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from sqlalchemy.exc import SQLAlchemyError

from matchday_service.core.exceptions import StorageException
from matchday_service.infra.events.outbox.repository import OutboxStore, get_outbox_store
from matchday_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from matchday_service.core.events.base import DomainEvent

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class UnitOfWork:
    """Explicit begin/commit/rollback around one AsyncSession.

    Database errors raised while committing, or escaping the ``async with``
    block, are re-raised as ``StorageException`` after the rollback.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        outbox: OutboxStore | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._outbox = outbox or get_outbox_store()
        self._session: AsyncSession | None = None
        self._published: list[DomainEvent] = []
        self._after_commit: list[Callable[[], Awaitable[None]]] = []

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            msg = "UnitOfWork has not begun; call begin() or use 'async with'"
            raise RuntimeError(msg)
        return self._session

    @property
    def published(self) -> tuple[DomainEvent, ...]:
        """Events appended to the outbox in the current transaction."""
        return tuple(self._published)

    @property
    def active(self) -> bool:
        return self._session is not None

    async def begin(self) -> None:
        if self._session is not None:
            msg = "UnitOfWork already begun"
            raise RuntimeError(msg)
        self._session = self._session_factory()
        await self._session.begin()
        self._published = []
        self._after_commit = []
        lazy_logger.debug(lambda: f"uow.begin: session={id(self._session):#x}")

    async def publish(self, event: DomainEvent) -> None:
        """Append ``event`` to the outbox inside the current transaction."""
        await self._outbox.store(self.session, event)
        self._published.append(event)

    def after_commit(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Run ``callback`` once the current transaction has committed."""
        if self._session is None:
            msg = "UnitOfWork has not begun; nothing to run after"
            raise RuntimeError(msg)
        self._after_commit.append(callback)

    async def commit(self) -> None:
        session = self.session
        try:
            await session.commit()
        except SQLAlchemyError as exc:
            await self._close(rollback=True)
            raise StorageException(
                detail=f"Commit failed: {exc.__class__.__name__}",
                extra={"events": [str(e.event_id) for e in self._published]},
            ) from exc

        if self._published:
            logger.info(
                "Transaction committed",
                extra={"events": [e.event_type for e in self._published]},
            )
        await self._close(rollback=False)

        callbacks, self._after_commit = self._after_commit, []
        for callback in callbacks:
            await callback()

    async def rollback(self) -> None:
        if self._session is None:
            return
        if self._published:
            logger.warning(
                "Transaction rolled back; discarding outbox rows",
                extra={"events": [e.event_type for e in self._published]},
            )
        await self._close(rollback=True)

    async def _close(self, *, rollback: bool) -> None:
        session, self._session = self._session, None
        if rollback:
            self._after_commit = []
        if session is None:
            return
        try:
            if rollback:
                await session.rollback()
        finally:
            await session.close()

    async def __aenter__(self) -> Self:
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            await self.commit()
            return

        await self.rollback()
        if isinstance(exc, SQLAlchemyError):
            raise StorageException(
                detail=f"Database operation failed: {exc.__class__.__name__}",
                extra={"error": str(exc)},
            ) from exc
