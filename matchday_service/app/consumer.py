"""Consumer process: per-service handler wiring and lifespan.

Startup order is database, cache, resolvers, subscriber, broker; shutdown
runs in reverse so no message is acknowledged after its dependencies are
gone.
"""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager, suppress
import logging
import signal
from typing import TYPE_CHECKING

from matchday_service.core.settings import ConsumerSettings, get_consumer_settings
from matchday_service.features.fixtures.event_handlers import FixtureEventHandler
from matchday_service.features.referees.event_handlers import RefereeEventHandler
from matchday_service.infra.cache.redis import get_cache
from matchday_service.infra.database.session import close_database, get_session_factory, init_database
from matchday_service.infra.events.consumer import DomainEventConsumer
from matchday_service.infra.events.handlers import LoggingEventHandler
from matchday_service.infra.external.resolvers import build_resolvers
from matchday_service.infra.messaging.broker import get_broker, start_broker, stop_broker
from matchday_service.infra.messaging.subscriber import register_domain_event_subscriber

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from matchday_service.core.settings import ServiceName
    from matchday_service.infra.events.handlers import DomainEventHandler
    from matchday_service.infra.external.resolvers import Resolvers

logger = logging.getLogger(__name__)


def build_handler(service: ServiceName, resolvers: Resolvers) -> DomainEventHandler:
    """Callback handler for ``service``; services without reactions only log."""
    match service:
        case "fixtures":
            return FixtureEventHandler(resolvers.fixtures)
        case "referees":
            return RefereeEventHandler(resolvers.referees)
        case _:
            return LoggingEventHandler(service)


@asynccontextmanager
async def consumer_lifespan(consumer_settings: ConsumerSettings) -> AsyncIterator[DomainEventConsumer]:
    """Start everything a consumer needs and tear it down in reverse."""
    async with AsyncExitStack() as stack:
        await init_database()
        stack.push_async_callback(close_database)

        cache = get_cache()
        await cache.connect()
        stack.push_async_callback(cache.disconnect)

        resolvers = build_resolvers(cache)
        stack.push_async_callback(resolvers.close)

        consumer = DomainEventConsumer(
            get_session_factory(),
            build_handler(consumer_settings.service, resolvers),
            instance=consumer_settings.instance or consumer_settings.service,
        )
        broker = get_broker()
        register_domain_event_subscriber(broker, consumer, consumer_settings=consumer_settings)

        stack.push_async_callback(stop_broker, broker)
        await start_broker(broker)
        logger.info(
            "Consumer started",
            extra={"service": consumer_settings.service, "instance": consumer.instance},
        )
        yield consumer

    logger.info("Consumer stopped", extra={"service": consumer_settings.service})


async def run_consumer(service: ServiceName | None = None) -> None:
    """Consume this service's domain events until SIGINT or SIGTERM."""
    consumer_settings = get_consumer_settings()
    if service is not None and service != consumer_settings.service:
        consumer_settings = ConsumerSettings(service=service)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    async with consumer_lifespan(consumer_settings):
        await stop.wait()
        logger.info("Shutdown signal received")
