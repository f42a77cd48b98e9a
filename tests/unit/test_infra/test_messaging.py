"""Unit tests for broker conventions and subscriber wiring."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock
import uuid

from faststream.rabbit import ExchangeType
import pytest

from matchday_service.core.events import ChangeCaptureEnvelope, FixtureCancelledEvent
from matchday_service.core.settings import ConsumerSettings, RabbitSettings
from matchday_service.infra.events.consumer import DomainEventConsumer
from matchday_service.infra.messaging import (
    domain_events_exchange,
    domain_events_queue,
    get_broker,
    register_domain_event_subscriber,
    reset_broker,
    start_broker,
)


@pytest.fixture
def rabbit_settings() -> RabbitSettings:
    return RabbitSettings(enabled=True, queue_prefix="matchday")


class TestConventions:
    def test_exchange_is_durable_topic(self, rabbit_settings):
        exchange = domain_events_exchange(rabbit_settings)

        assert exchange.name == "matchday.domain-events"
        assert exchange.type == ExchangeType.TOPIC
        assert exchange.durable is True

    def test_queue_is_per_service_and_durable(self, rabbit_settings):
        queue = domain_events_queue(rabbit_settings, ConsumerSettings(service="referees"))

        assert queue.name == "matchday.referees.domain-events"
        assert queue.durable is True


class TestSubscriber:
    """The subscriber hands raw messages to the consumer with manual ack."""

    async def test_registers_manual_ack_subscriber(self, rabbit_settings, session_factory):
        captured = {}

        def subscriber(*args, **kwargs):
            captured["args"], captured["kwargs"] = args, kwargs

            def decorator(func):
                captured["func"] = func
                return func

            return decorator

        broker = MagicMock()
        broker.subscriber.side_effect = subscriber
        handler = AsyncMock()
        consumer = DomainEventConsumer(session_factory, handler, instance="fixtures")

        register_domain_event_subscriber(
            broker,
            consumer,
            rabbit_settings=rabbit_settings,
            consumer_settings=ConsumerSettings(service="fixtures"),
        )

        queue, exchange = captured["args"]
        assert queue.name == "matchday.fixtures.domain-events"
        assert exchange.name == "matchday.domain-events"
        assert captured["kwargs"] == {"no_ack": True}

        event = FixtureCancelledEvent(fixture_id=uuid.uuid4())
        message = AsyncMock()
        message.body = ChangeCaptureEnvelope.wrap(event).to_json().encode()

        await captured["func"]({}, message)

        handler.handle.assert_awaited_once()
        assert handler.handle.await_args.args[0] == event
        message.ack.assert_awaited_once()


class TestBroker:
    def test_get_broker_requires_configuration(self, monkeypatch):
        monkeypatch.setenv("RABBIT_ENABLED", "false")
        reset_broker()

        with pytest.raises(RuntimeError, match="not configured"):
            get_broker()

    async def test_start_timeout_becomes_connection_error(self, monkeypatch):
        monkeypatch.setenv("RABBIT_CONNECTION_TIMEOUT", "1")

        async def never_connects():
            await asyncio.sleep(10)

        broker = MagicMock()
        broker.start = never_connects

        with pytest.raises(ConnectionError, match="timeout"):
            await start_broker(broker)
