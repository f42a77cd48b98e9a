"""Domain event base class.

Domain events are immutable records of something that happened to one
aggregate. They travel from a producing service's outbox, through the relay
and the broker, into other services' inboxes.

Key features:
- Automatic event id (UUID v7) and timestamp generation
- Aggregate identification so the outbox can carry a deterministic partition key
- A flat JSON wire form tagged with ``event_type``
"""

from __future__ import annotations

from datetime import UTC, datetime
import json
from typing import Any, ClassVar
import uuid

from pydantic import BaseModel, ConfigDict, Field

from matchday_service.core.database.base import generate_uuid7


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Subclasses must define:
    - event_type: ClassVar[str] - Unique event type identifier (e.g., "fixture.cancelled")
    - aggregate_type: ClassVar[str] - Aggregate the event belongs to (e.g., "fixture")
    - aggregate_field: ClassVar[str] - Name of the field holding that aggregate's id

    Example:
        class FixtureCancelledEvent(DomainEvent):
            event_type: ClassVar[str] = "fixture.cancelled"
            aggregate_type: ClassVar[str] = "fixture"
            aggregate_field: ClassVar[str] = "fixture_id"

            fixture_id: uuid.UUID

    Attributes:
        event_id: Unique identifier for this event instance (UUID v7). Doubles as
            the outbox row id and therefore as the inbox deduplication key.
        occurred_at: When the event occurred (UTC)
        correlation_id: Optional ID linking events caused by the same command
    """

    event_type: ClassVar[str] = "domain.event"
    aggregate_type: ClassVar[str] = "domain"
    aggregate_field: ClassVar[str | None] = None

    event_id: uuid.UUID = Field(
        default_factory=generate_uuid7,
        description="Unique event identifier (UUID v7 for time-ordering)",
    )
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Event timestamp in UTC",
    )
    correlation_id: str | None = Field(
        default=None,
        description="Correlation ID shared by events emitted from one command",
    )

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Validate subclass has required class variables."""
        super().__init_subclass__(**kwargs)
        if cls.event_type == "domain.event":
            msg = f"{cls.__name__} must define 'event_type' class variable"
            raise TypeError(msg)
        if cls.aggregate_field is None:
            msg = f"{cls.__name__} must define 'aggregate_field' class variable"
            raise TypeError(msg)

    @property
    def aggregate_id(self) -> str:
        """Id of the aggregate this event belongs to, used as the partition key."""
        return str(getattr(self, self.aggregate_field))  # type: ignore[arg-type]

    def to_outbox_payload(self) -> dict[str, Any]:
        """Convert event to the JSON-ready dict stored in the outbox.

        Returns:
            Dictionary with ``event_type`` and all event fields, JSON-compatible.
        """
        return {"event_type": self.event_type, **self.model_dump(mode="json")}

    def to_json(self) -> str:
        """Serialize the outbox payload to a JSON string."""
        return json.dumps(self.to_outbox_payload())

    def __str__(self) -> str:
        return f"{self.event_type}({self.aggregate_type}={self.aggregate_id}, id={self.event_id})"
