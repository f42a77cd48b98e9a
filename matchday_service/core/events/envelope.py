"""Change-capture envelope delivered by the relay.

The relay ships outbox rows as-is: every message body is a JSON object with
the row's columns, and the ``payload`` column is itself a JSON *string*
holding the event. Decoding therefore takes two steps: parse the envelope,
then parse ``payload`` and hand it to the event registry.

Example body:
    {
        "id": "0192f0c1-...",
        "instance": null,
        "payload": "{\\"event_type\\": \\"fixture.cancelled\\", \\"fixture_id\\": \\"...\\"}",
        "created_at": "2025-03-01T10:00:00Z"
    }
"""

from __future__ import annotations

from datetime import UTC, datetime
import json
from typing import TYPE_CHECKING, Any
import uuid

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from matchday_service.core.events.registry import EventRegistry, event_registry
from matchday_service.core.exceptions import DecodeException

if TYPE_CHECKING:
    from matchday_service.core.events.base import DomainEvent


class ChangeCaptureEnvelope(BaseModel):
    """One outbox row as received from the broker."""

    id: uuid.UUID = Field(description="Outbox row id; equal to the event id")
    instance: str | None = Field(default=None, description="Producing instance tag, if any")
    payload: str = Field(description="String-encoded event JSON")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the outbox row was written",
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def parse(cls, body: bytes | str | dict[str, Any]) -> ChangeCaptureEnvelope:
        """Parse a raw broker body into an envelope.

        Raises:
            DecodeException: If the body is not JSON or lacks envelope fields.
        """
        try:
            if isinstance(body, dict):
                return cls.model_validate(body)
            return cls.model_validate_json(body)
        except ValidationError as exc:
            raise DecodeException(
                detail=f"Malformed change-capture envelope: {exc.error_count()} error(s)",
                type="malformed-envelope",
                extra={"errors": exc.errors(include_url=False)},
            ) from exc

    @classmethod
    def wrap(cls, event: DomainEvent, *, instance: str | None = None) -> ChangeCaptureEnvelope:
        """Build the envelope the relay would emit for ``event``."""
        return cls(id=event.event_id, instance=instance, payload=event.to_json(), created_at=event.occurred_at)

    def payload_dict(self) -> dict[str, Any]:
        """Second decoding step: parse the string-encoded event JSON."""
        try:
            data = json.loads(self.payload)
        except json.JSONDecodeError as exc:
            raise DecodeException(
                detail=f"Event payload is not valid JSON: {exc.msg}",
                type="malformed-payload",
                extra={"envelope_id": str(self.id)},
            ) from exc
        # Some relays double-encode; accept one more layer of string wrapping
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                raise DecodeException(
                    detail="Event payload is a string that is not JSON",
                    type="malformed-payload",
                    extra={"envelope_id": str(self.id)},
                ) from exc
        return data

    def decode_event(self, registry: EventRegistry = event_registry) -> DomainEvent:
        """Decode the wrapped payload into a typed domain event.

        Raises:
            DecodeException: If the payload is malformed or names an unknown event.
        """
        return registry.deserialize(self.payload_dict())

    def to_json(self) -> str:
        return self.model_dump_json()
