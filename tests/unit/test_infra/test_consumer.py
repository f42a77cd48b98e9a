"""Unit tests for the inbox-deduplicating domain event consumer."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest

from matchday_service.core.events import (
    ChangeCaptureEnvelope,
    DomainEvent,
    FixtureCancelledEvent,
    RefereeCreatedEvent,
)
from matchday_service.core.exceptions import ConflictException, DecodeException
from matchday_service.infra.database import UnitOfWork
from matchday_service.infra.events.consumer import ConsumeOutcome, DomainEventConsumer
from matchday_service.infra.events.inbox.models import InboxRecord
from tests.utils import outbox_rows

if TYPE_CHECKING:
    from matchday_service.core.events import TransactionalPublisher


class RecordingHandler:
    """Handler that records events and can be told to fail first."""

    def __init__(self, *, fail_times: int = 0, emit: DomainEvent | None = None) -> None:
        self.events: list[DomainEvent] = []
        self.fail_times = fail_times
        self.emit = emit

    async def handle(self, event: DomainEvent, uow: TransactionalPublisher) -> None:
        if self.emit is not None:
            await uow.publish(self.emit)
        if self.fail_times:
            self.fail_times -= 1
            raise ConflictException("slot is busy")
        self.events.append(event)


async def _inbox_row(session_factory, event_id: uuid.UUID, instance: str) -> InboxRecord | None:
    async with session_factory() as session:
        return await session.get(InboxRecord, (event_id, instance))


@pytest.fixture
def event() -> FixtureCancelledEvent:
    return FixtureCancelledEvent(fixture_id=uuid.uuid4())


@pytest.fixture
def body(event: FixtureCancelledEvent) -> bytes:
    return ChangeCaptureEnvelope.wrap(event).to_json().encode()


# ============================================================================
# Deduplication
# ============================================================================


class TestDeduplication:
    """Each event is handled once per consuming instance."""

    async def test_first_delivery_is_processed(self, session_factory, event, body):
        handler = RecordingHandler()
        consumer = DomainEventConsumer(session_factory, handler, instance="fixtures")

        outcome = await consumer.process(body)

        assert outcome is ConsumeOutcome.PROCESSED
        assert handler.events == [event]
        row = await _inbox_row(session_factory, event.event_id, "fixtures")
        assert row is not None
        assert row.is_processed
        assert row.event_type == "fixture.cancelled"

    async def test_redelivery_is_skipped(self, session_factory, event, body):
        """A processed event is acknowledged without running the handler again."""
        handler = RecordingHandler()
        consumer = DomainEventConsumer(session_factory, handler, instance="fixtures")

        await consumer.process(body)
        outcome = await consumer.process(body)

        assert outcome is ConsumeOutcome.DUPLICATE
        assert len(handler.events) == 1

    async def test_instances_deduplicate_independently(self, session_factory, event, body):
        """Two services sharing a database each handle the event once."""
        fixtures = RecordingHandler()
        referees = RecordingHandler()

        await DomainEventConsumer(session_factory, fixtures, instance="fixtures").process(body)
        outcome = await DomainEventConsumer(session_factory, referees, instance="referees").process(body)

        assert outcome is ConsumeOutcome.PROCESSED
        assert fixtures.events == referees.events == [event]

    async def test_unfinished_sighting_is_retried(self, session_factory, event, body):
        """A sighting without processed_at does not count as done."""
        async with UnitOfWork(session_factory) as uow:
            uow.session.add(
                InboxRecord(id=event.event_id, instance="fixtures", payload=event.to_json(), processed_at=None),
            )

        handler = RecordingHandler()
        outcome = await DomainEventConsumer(session_factory, handler, instance="fixtures").process(body)

        assert outcome is ConsumeOutcome.PROCESSED
        assert handler.events == [event]
        assert (await _inbox_row(session_factory, event.event_id, "fixtures")).is_processed


# ============================================================================
# Failure handling
# ============================================================================


class TestFailures:
    """A failed delivery leaves nothing behind and can be redelivered."""

    async def test_handler_failure_rolls_back_sighting(self, session_factory, event, body):
        handler = RecordingHandler(fail_times=1)
        consumer = DomainEventConsumer(session_factory, handler, instance="fixtures")

        with pytest.raises(ConflictException):
            await consumer.process(body)

        assert await _inbox_row(session_factory, event.event_id, "fixtures") is None

        assert await consumer.process(body) is ConsumeOutcome.PROCESSED
        assert handler.events == [event]

    async def test_handler_writes_commit_with_inbox_marker(self, session_factory, body):
        """Events published by a handler share the consumer's transaction."""
        follow_up = RefereeCreatedEvent(referee_id=uuid.uuid4())
        consumer = DomainEventConsumer(session_factory, RecordingHandler(emit=follow_up), instance="fixtures")

        await consumer.process(body)

        assert [row.id for row in await outbox_rows(session_factory)] == [follow_up.event_id]

    async def test_handler_writes_roll_back_on_failure(self, session_factory, body):
        follow_up = RefereeCreatedEvent(referee_id=uuid.uuid4())
        consumer = DomainEventConsumer(
            session_factory,
            RecordingHandler(fail_times=1, emit=follow_up),
            instance="fixtures",
        )

        with pytest.raises(ConflictException):
            await consumer.process(body)

        assert await outbox_rows(session_factory) == []

    async def test_unknown_event_type_is_a_decode_error(self, session_factory):
        event_id = uuid.uuid4()
        envelope = ChangeCaptureEnvelope(
            id=event_id,
            payload=json.dumps({"event_type": "fixture.postponed", "fixture_id": str(uuid.uuid4())}),
        )
        consumer = DomainEventConsumer(session_factory, RecordingHandler(), instance="fixtures")

        with pytest.raises(DecodeException):
            await consumer.process(envelope.to_json())

        assert await _inbox_row(session_factory, event_id, "fixtures") is None

    async def test_malformed_body_is_a_decode_error(self, session_factory):
        consumer = DomainEventConsumer(session_factory, RecordingHandler(), instance="fixtures")

        with pytest.raises(DecodeException):
            await consumer.process(b"\x00garbage")


# ============================================================================
# Broker acknowledgement
# ============================================================================


def _message(body: bytes) -> AsyncMock:
    message = AsyncMock()
    message.body = body
    message.message_id = "msg-1"
    message.headers = {}
    message.raw_message = MagicMock(redelivered=False)
    return message


class TestAcknowledgement:
    """Ack only after commit; nack with requeue on any failure."""

    async def test_success_acks(self, session_factory, body):
        consumer = DomainEventConsumer(session_factory, RecordingHandler(), instance="fixtures")
        message = _message(body)

        outcome = await consumer.on_message(message)

        assert outcome is ConsumeOutcome.PROCESSED
        message.ack.assert_awaited_once()
        message.nack.assert_not_awaited()

    async def test_duplicate_acks(self, session_factory, body):
        consumer = DomainEventConsumer(session_factory, RecordingHandler(), instance="fixtures")
        await consumer.process(body)
        message = _message(body)

        assert await consumer.on_message(message) is ConsumeOutcome.DUPLICATE
        message.ack.assert_awaited_once()

    async def test_failure_nacks_with_requeue_and_reraises(self, session_factory, body):
        consumer = DomainEventConsumer(session_factory, RecordingHandler(fail_times=1), instance="fixtures")
        message = _message(body)

        with pytest.raises(ConflictException):
            await consumer.on_message(message)

        message.nack.assert_awaited_once_with(requeue=True)
        message.ack.assert_not_awaited()

    async def test_decode_failure_nacks(self, session_factory):
        consumer = DomainEventConsumer(session_factory, RecordingHandler(), instance="fixtures")
        message = _message(b"{}")

        with pytest.raises(DecodeException):
            await consumer.on_message(message)

        message.nack.assert_awaited_once_with(requeue=True)

    async def test_failure_log_carries_redelivery_fields(self, session_factory, body, caplog):
        consumer = DomainEventConsumer(session_factory, RecordingHandler(fail_times=1), instance="fixtures")
        message = _message(body)
        message.raw_message.redelivered = True
        message.headers = {"x-delivery-count": 3}

        with (
            caplog.at_level(logging.ERROR, logger="matchday_service.infra.events.consumer"),
            pytest.raises(ConflictException),
        ):
            await consumer.on_message(message)

        record = next(r for r in caplog.records if r.getMessage().startswith("Event processing failed"))
        assert record.redelivered is True
        assert record.delivery_count == 3
        assert record.message_id == "msg-1"
