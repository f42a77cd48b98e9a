"""Event type registry for deserialization.

The registry maps ``event_type`` strings to event classes so consumers can turn
a decoded outbox payload back into a typed event.

Usage:
    from matchday_service.core.events import event_registry

    @event_registry.register
    class FixtureCancelledEvent(FixtureEvent):
        event_type: ClassVar[str] = "fixture.cancelled"

    event = event_registry.deserialize({"event_type": "fixture.cancelled", ...})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from matchday_service.core.exceptions import DecodeException

if TYPE_CHECKING:
    from matchday_service.core.events.base import DomainEvent

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DomainEvent")


class EventRegistry:
    """Registry for domain event types.

    Registration is expected during import of the catalog module; lookups are
    read-only afterwards.
    """

    def __init__(self) -> None:
        self._events: dict[str, type[DomainEvent]] = {}

    def register(self, event_class: type[T]) -> type[T]:
        """Register an event class; usable as a decorator.

        Raises:
            ValueError: If another class already claimed the same event_type.
        """
        event_type = event_class.event_type
        existing = self._events.get(event_type)
        if existing is not None and existing is not event_class:
            msg = f"Event type '{event_type}' already registered with {existing.__name__}"
            raise ValueError(msg)

        self._events[event_type] = event_class
        logger.debug(
            "Registered event type",
            extra={"event_type": event_type, "class": event_class.__name__},
        )
        return event_class

    def get(self, event_type: str) -> type[DomainEvent] | None:
        """Get an event class by type."""
        return self._events.get(event_type)

    def get_or_raise(self, event_type: str) -> type[DomainEvent]:
        """Get an event class or raise DecodeException if unknown."""
        event_class = self.get(event_type)
        if event_class is None:
            raise DecodeException(
                detail=f"Unknown event type: '{event_type}'",
                type="unknown-event-type",
                extra={"event_type": event_type},
            )
        return event_class

    def deserialize(self, payload: dict[str, Any]) -> DomainEvent:
        """Deserialize an event from its outbox payload.

        Args:
            payload: Dictionary containing ``event_type`` and the event fields.

        Returns:
            Deserialized event instance.

        Raises:
            DecodeException: If the payload is not a mapping, lacks
                ``event_type``, names an unknown type, or fails validation.
        """
        if not isinstance(payload, dict):
            raise DecodeException(
                detail=f"Event payload must be a JSON object, got {type(payload).__name__}",
            )
        if "event_type" not in payload:
            raise DecodeException(detail="Payload missing 'event_type'")

        event_type = payload["event_type"]
        event_class = self.get_or_raise(event_type)
        data = {key: value for key, value in payload.items() if key != "event_type"}

        try:
            return event_class.model_validate(data)
        except ValidationError as exc:
            raise DecodeException(
                detail=f"Payload does not match '{event_type}': {exc.error_count()} error(s)",
                extra={"event_type": event_type, "errors": exc.errors(include_url=False)},
            ) from exc

    def list_types(self) -> list[str]:
        """List all registered event types."""
        return sorted(self._events)

    def __contains__(self, event_type: object) -> bool:
        return event_type in self._events

    def __len__(self) -> int:
        return len(self._events)


# Global registry instance
event_registry = EventRegistry()
