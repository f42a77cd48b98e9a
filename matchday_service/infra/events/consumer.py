"""Inbox-deduplicating domain event consumer.

Per message:

    parse envelope -> begin tx -> inbox lookup
        processed?  -> ack, stop
        otherwise   -> record sighting -> decode -> dispatch -> mark processed
                    -> commit -> ack

Any failure after ``begin`` rolls the whole transaction back, sighting
included, and the message is nacked for redelivery. A sighting left behind
without ``processed_at`` is not treated as done: the next delivery reuses the
row and runs the handler again.
"""

from __future__ import annotations

from enum import StrEnum
import logging
from typing import TYPE_CHECKING, Any

from matchday_service.core.events.envelope import ChangeCaptureEnvelope
from matchday_service.core.events.registry import EventRegistry, event_registry
from matchday_service.infra.database.unit_of_work import UnitOfWork
from matchday_service.infra.events.inbox.repository import InboxStore, get_inbox_store
from matchday_service.infra.logging import get_lazy_logger, log_context

if TYPE_CHECKING:
    from faststream.rabbit.message import RabbitMessage
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from matchday_service.infra.events.handlers import DomainEventHandler

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class ConsumeOutcome(StrEnum):
    """What the consumer did with one delivery."""

    PROCESSED = "processed"
    DUPLICATE = "duplicate"


class DomainEventConsumer:
    """Dedup, dispatch and mark one message at a time for a single service.

    Args:
        session_factory: Factory for the service's own database.
        handler: The service's callback handler.
        instance: Inbox instance tag shared by every replica of the service.
        registry: Event registry used to decode payloads.
        inbox: Inbox store (defaults to the shared instance).
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        handler: DomainEventHandler,
        *,
        instance: str,
        registry: EventRegistry = event_registry,
        inbox: InboxStore | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._handler = handler
        self._instance = instance
        self._registry = registry
        self._inbox = inbox or get_inbox_store()

    @property
    def instance(self) -> str:
        return self._instance

    async def process(self, body: bytes | str | dict[str, Any]) -> ConsumeOutcome:
        """Run one delivery through the inbox state machine.

        Raises:
            DecodeException: Malformed envelope or event payload.
            StorageException: The local transaction could not be committed.
            AppException: Whatever the callback handler raised.
        """
        envelope = ChangeCaptureEnvelope.parse(body)

        with log_context(event_id=str(envelope.id), instance=self._instance):
            async with UnitOfWork(self._session_factory) as uow:
                record = await self._inbox.lookup(uow.session, envelope.id, self._instance)
                if record is not None and record.is_processed:
                    logger.info(
                        "Skipping already processed event",
                        extra={"processed_at": record.processed_at.isoformat()},
                    )
                    return ConsumeOutcome.DUPLICATE

                if record is None:
                    record = await self._inbox.record_sighting(
                        uow.session,
                        event_id=envelope.id,
                        instance=self._instance,
                        payload=envelope.payload,
                    )
                else:
                    logger.warning("Retrying event with an unfinished inbox sighting")

                event = envelope.decode_event(self._registry)
                record.event_type = event.event_type

                with log_context(event_type=event.event_type):
                    lazy_logger.debug(lambda: f"consumer.dispatch: {event!r}")
                    await self._handler.handle(event, uow)
                    await self._inbox.mark_processed(uow.session, record)

            logger.info("Event processed", extra={"event_type": event.event_type})
        return ConsumeOutcome.PROCESSED

    async def on_message(self, message: RabbitMessage) -> ConsumeOutcome:
        """Broker callback: process, then ack; nack with requeue on any failure."""
        try:
            outcome = await self.process(message.body)
        except Exception:
            # a requeued head-of-line message stalls the queue at prefetch 1;
            # redelivery fields let operators spot a message stuck in that loop
            logger.exception(
                "Event processing failed; message requeued",
                extra={
                    "instance": self._instance,
                    "message_id": message.message_id,
                    "redelivered": message.raw_message.redelivered,
                    "delivery_count": (message.headers or {}).get("x-delivery-count"),
                },
            )
            await message.nack(requeue=True)
            raise

        await message.ack()
        return outcome
