"""RabbitMQ broker configuration using FastStream.

The broker is created on first use from ``RabbitSettings``. Each consumer
process owns one broker and one subscriber; the channel QoS is set from
``prefetch_count`` so a process never holds more unacknowledged messages
than it is handling.

Usage:
    broker = get_broker()
    register_domain_event_subscriber(broker, consumer)
    await start_broker(broker)
    ...
    await stop_broker(broker)
"""

from __future__ import annotations

import asyncio
import logging

from faststream.rabbit import RabbitBroker

from matchday_service.core.settings import get_rabbit_settings

logger = logging.getLogger(__name__)

_broker: RabbitBroker | None = None


def get_broker() -> RabbitBroker:
    """Return the process-wide broker, creating it on first call.

    Raises:
        RuntimeError: If RabbitMQ is disabled in settings.
    """
    global _broker

    if _broker is not None:
        return _broker

    rabbit_settings = get_rabbit_settings()
    if not rabbit_settings.is_configured:
        msg = "RabbitMQ not configured; set RABBIT_ENABLED=true and connection settings"
        raise RuntimeError(msg)

    _broker = RabbitBroker(
        rabbit_settings.get_url(),
        graceful_timeout=rabbit_settings.graceful_timeout,
        max_consumers=rabbit_settings.prefetch_count,
        logger=logger,
    )
    return _broker


def reset_broker() -> None:
    """Forget the cached broker (tests and CLI re-runs)."""
    global _broker
    _broker = None


async def start_broker(broker: RabbitBroker) -> None:
    """Connect ``broker`` and start its subscribers, bounded by the connection timeout."""
    rabbit_settings = get_rabbit_settings()
    logger.info(
        "Starting RabbitMQ broker",
        extra={
            "url": rabbit_settings.get_url(),
            "connection_timeout": rabbit_settings.connection_timeout,
        },
    )
    try:
        await asyncio.wait_for(broker.start(), timeout=rabbit_settings.connection_timeout)
    except TimeoutError:
        error_msg = f"RabbitMQ connection timeout after {rabbit_settings.connection_timeout}s"
        logger.error(error_msg, extra={"connection_timeout": rabbit_settings.connection_timeout})
        raise ConnectionError(error_msg) from None
    logger.info("RabbitMQ broker started successfully")


async def stop_broker(broker: RabbitBroker) -> None:
    """Close ``broker``; in-flight handlers get ``graceful_timeout`` to finish."""
    logger.info("Stopping RabbitMQ broker")
    try:
        await broker.close()
    except Exception as e:
        logger.exception("Error stopping RabbitMQ broker", extra={"error": str(e)})
        raise
    logger.info("RabbitMQ broker stopped successfully")

