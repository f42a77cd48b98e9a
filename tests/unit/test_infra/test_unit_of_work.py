"""Unit tests for UnitOfWork and the outbox store."""

from __future__ import annotations

from functools import partial
import json
import uuid

import pytest

from matchday_service.core.events import RefereeCreatedEvent, TransactionalPublisher, event_registry
from matchday_service.core.exceptions import StorageException
from matchday_service.features.referees.models import Referee
from matchday_service.infra.database import UnitOfWork
from tests.utils import outbox_rows


async def _referee_exists(session_factory, referee_id: uuid.UUID) -> bool:
    async with session_factory() as session:
        return await session.get(Referee, referee_id) is not None


class TestUnitOfWork:
    """State change and outbox row commit or roll back together."""

    async def test_commit_persists_state_and_event(self, session_factory):
        """A clean exit commits the business row and its outbox row."""
        async with UnitOfWork(session_factory) as uow:
            assert isinstance(uow, TransactionalPublisher)
            referee = Referee(name="Maurizio Mariani", club="AIA Aprilia")
            uow.session.add(referee)
            await uow.session.flush()
            await uow.publish(RefereeCreatedEvent(referee_id=referee.id))

        rows = await outbox_rows(session_factory)
        assert [row.event_type for row in rows] == ["referee.created"]
        assert rows[0].aggregate_type == "referee"
        assert rows[0].aggregate_id == str(referee.id)
        assert await _referee_exists(session_factory, referee.id)

    async def test_outbox_row_id_is_event_id(self, session_factory):
        event = RefereeCreatedEvent(referee_id=uuid.uuid4())

        async with UnitOfWork(session_factory) as uow:
            await uow.publish(event)
            assert uow.published == (event,)

        (row,) = await outbox_rows(session_factory)
        assert row.id == event.event_id
        assert event_registry.deserialize(json.loads(row.payload)) == event

    async def test_correlation_id_is_stored(self, session_factory):
        event = RefereeCreatedEvent(referee_id=uuid.uuid4(), correlation_id="req-42")

        async with UnitOfWork(session_factory) as uow:
            await uow.publish(event)

        (row,) = await outbox_rows(session_factory)
        assert row.correlation_id == "req-42"

    async def test_exception_rolls_back_state_and_event(self, session_factory):
        """No event is stored without its state change, and vice versa."""
        referee = Referee(name="Marco Guida", club="AIA Torre Annunziata")

        with pytest.raises(RuntimeError, match="boom"):
            async with UnitOfWork(session_factory) as uow:
                uow.session.add(referee)
                await uow.session.flush()
                await uow.publish(RefereeCreatedEvent(referee_id=referee.id))
                raise RuntimeError("boom")

        assert await outbox_rows(session_factory) == []
        assert not await _referee_exists(session_factory, referee.id)

    async def test_storage_failure_becomes_storage_exception(self, session_factory):
        """Database errors surface as StorageException after the rollback."""
        event = RefereeCreatedEvent(referee_id=uuid.uuid4())

        with pytest.raises(StorageException):
            async with UnitOfWork(session_factory) as uow:
                await uow.publish(event)
                await uow.publish(event)

        assert await outbox_rows(session_factory) == []

    async def test_explicit_begin_commit(self, session_factory):
        uow = UnitOfWork(session_factory)
        await uow.begin()
        assert uow.active
        await uow.publish(RefereeCreatedEvent(referee_id=uuid.uuid4()))
        await uow.commit()

        assert not uow.active
        assert len(await outbox_rows(session_factory)) == 1

    async def test_explicit_rollback_discards_events(self, session_factory):
        uow = UnitOfWork(session_factory)
        await uow.begin()
        await uow.publish(RefereeCreatedEvent(referee_id=uuid.uuid4()))
        await uow.rollback()

        assert not uow.active
        assert await outbox_rows(session_factory) == []

    async def test_session_requires_begin(self, session_factory):
        with pytest.raises(RuntimeError, match="has not begun"):
            _ = UnitOfWork(session_factory).session

    async def test_begin_twice_is_rejected(self, session_factory):
        uow = UnitOfWork(session_factory)
        await uow.begin()
        try:
            with pytest.raises(RuntimeError, match="already begun"):
                await uow.begin()
        finally:
            await uow.rollback()


class TestAfterCommit:
    async def test_callbacks_run_after_commit_in_order(self, session_factory):
        calls: list[str] = []

        async def callback(name: str) -> None:
            # the row must already be visible to a fresh session
            calls.append(f"{name}:{len(await outbox_rows(session_factory))}")

        async with UnitOfWork(session_factory) as uow:
            await uow.publish(RefereeCreatedEvent(referee_id=uuid.uuid4()))
            uow.after_commit(partial(callback, "first"))
            uow.after_commit(partial(callback, "second"))
            assert calls == []

        assert calls == ["first:1", "second:1"]

    async def test_callbacks_dropped_on_rollback(self, session_factory):
        calls: list[str] = []

        async def callback() -> None:
            calls.append("ran")

        with pytest.raises(ValueError):
            async with UnitOfWork(session_factory) as uow:
                uow.after_commit(callback)
                raise ValueError("boom")

        assert calls == []

    async def test_callbacks_do_not_leak_into_next_transaction(self, session_factory):
        calls: list[str] = []

        async def callback() -> None:
            calls.append("ran")

        uow = UnitOfWork(session_factory)
        await uow.begin()
        uow.after_commit(callback)
        await uow.rollback()
        await uow.begin()
        await uow.commit()

        assert calls == []

    async def test_requires_begin(self, session_factory):
        async def callback() -> None:
            return None

        with pytest.raises(RuntimeError, match="has not begun"):
            UnitOfWork(session_factory).after_commit(callback)
