"""Transactional publisher contract.

Commands never talk to the broker. They hand events to a transactional
publisher, which appends them to the outbox inside the same database
transaction as the state change. Committing the publisher commits both;
rolling it back discards both. Side effects outside the database are
deferred with ``after_commit`` so other readers never see them early.

The concrete implementation is ``matchday_service.infra.database.UnitOfWork``;
command code depends only on this protocol so it can be driven by a fake in
tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from sqlalchemy.ext.asyncio import AsyncSession

    from matchday_service.core.events.base import DomainEvent


@runtime_checkable
class TransactionalPublisher(Protocol):
    """Begin/commit/rollback around a session, plus outbox publishing."""

    @property
    def session(self) -> AsyncSession:
        """The session all writes of this transaction go through."""
        ...

    async def begin(self) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def publish(self, event: DomainEvent) -> None:
        """Append ``event`` to the outbox as part of the current transaction."""
        ...

    def after_commit(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Defer ``callback`` until the current transaction has committed."""
        ...
