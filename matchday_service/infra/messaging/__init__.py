"""RabbitMQ messaging via FastStream."""

from matchday_service.infra.messaging.broker import (
    get_broker,
    reset_broker,
    start_broker,
    stop_broker,
)
from matchday_service.infra.messaging.conventions import (
    ALL_EVENTS_ROUTING_KEY,
    domain_events_exchange,
    domain_events_queue,
)
from matchday_service.infra.messaging.subscriber import register_domain_event_subscriber

__all__ = [
    "ALL_EVENTS_ROUTING_KEY",
    "domain_events_exchange",
    "domain_events_queue",
    "get_broker",
    "register_domain_event_subscriber",
    "reset_broker",
    "start_broker",
    "stop_broker",
]
