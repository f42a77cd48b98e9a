"""Exchange and queue conventions for domain event delivery.

The relay publishes every outbox row to one durable topic exchange. Each
service declares its own durable queue and binds it with ``#`` so it sees
the whole catalog; its callback handler decides which variants matter.
Routing keys are set by the relay (event type or aggregate id) and play no
role in consumption.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from faststream.rabbit import ExchangeType, RabbitExchange, RabbitQueue

if TYPE_CHECKING:
    from matchday_service.core.settings import ConsumerSettings, RabbitSettings

ALL_EVENTS_ROUTING_KEY = "#"


def domain_events_exchange(rabbit_settings: RabbitSettings) -> RabbitExchange:
    """Topic exchange the relay ships outbox rows to."""
    return RabbitExchange(
        name=rabbit_settings.exchange_name,
        type=ExchangeType.TOPIC,
        durable=True,
        auto_delete=False,
    )


def domain_events_queue(rabbit_settings: RabbitSettings, consumer_settings: ConsumerSettings) -> RabbitQueue:
    """Durable per-service queue bound to every routing key.

    Example:
        >>> domain_events_queue(RabbitSettings(), ConsumerSettings(service="fixtures")).name
        'matchday.fixtures.domain-events'
    """
    return RabbitQueue(
        name=consumer_settings.queue_name(rabbit_settings.queue_prefix),
        durable=True,
        auto_delete=False,
        routing_key=ALL_EVENTS_ROUTING_KEY,
    )
