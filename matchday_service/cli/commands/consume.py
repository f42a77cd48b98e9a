"""Run a service's domain event consumer."""

from typing import get_args

import click

from matchday_service.cli.utils import coro, fail, info
from matchday_service.core.settings import ServiceName, get_consumer_settings, get_rabbit_settings


@click.command()
@click.option(
    "--service",
    type=click.Choice(get_args(ServiceName)),
    default=None,
    help="Service to consume for (default: CONSUMER_SERVICE)",
)
@coro
async def consume(service: str | None) -> None:
    """Consume domain events until interrupted."""
    from matchday_service.app.consumer import run_consumer

    rabbit = get_rabbit_settings()
    if not rabbit.is_configured:
        fail("RabbitMQ is not configured (check RABBIT_ENABLED and AMQP_URI)")

    info(f"Starting consumer for: {service or get_consumer_settings().service}")
    try:
        await run_consumer(service)  # type: ignore[arg-type]
    except ConnectionError as e:
        fail(f"Broker unavailable: {e}")
    info("Consumer stopped")
