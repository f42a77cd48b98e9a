"""Binds a DomainEventConsumer to the broker.

The subscriber disables FastStream's own acknowledgement: the consumer acks
only after its local transaction commits and nacks with requeue otherwise.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from faststream.rabbit.annotations import RabbitMessage

from matchday_service.core.settings import get_consumer_settings, get_rabbit_settings
from matchday_service.infra.messaging.conventions import domain_events_exchange, domain_events_queue

if TYPE_CHECKING:
    from faststream.rabbit import RabbitBroker

    from matchday_service.core.settings import ConsumerSettings, RabbitSettings
    from matchday_service.infra.events.consumer import DomainEventConsumer

logger = logging.getLogger(__name__)


def register_domain_event_subscriber(
    broker: RabbitBroker,
    consumer: DomainEventConsumer,
    *,
    rabbit_settings: RabbitSettings | None = None,
    consumer_settings: ConsumerSettings | None = None,
) -> None:
    """Subscribe ``consumer`` to this service's domain event queue."""
    rabbit_settings = rabbit_settings or get_rabbit_settings()
    consumer_settings = consumer_settings or get_consumer_settings()

    queue = domain_events_queue(rabbit_settings, consumer_settings)
    exchange = domain_events_exchange(rabbit_settings)

    @broker.subscriber(queue, exchange, no_ack=True)
    async def on_domain_event(body: Any, message: RabbitMessage) -> None:
        # ``body`` is FastStream's decoded copy; the consumer parses the raw bytes
        await consumer.on_message(message)

    logger.info(
        "Domain event subscriber registered",
        extra={
            "queue": queue.name,
            "exchange": exchange.name,
            "instance": consumer.instance,
        },
    )
