"""Unit tests for the change-capture envelope."""

from __future__ import annotations

import json
import uuid

import pytest

from matchday_service.core.events import ChangeCaptureEnvelope, FixtureCancelledEvent
from matchday_service.core.exceptions import DecodeException


@pytest.fixture
def event() -> FixtureCancelledEvent:
    return FixtureCancelledEvent(fixture_id=uuid.uuid4())


class TestChangeCaptureEnvelope:
    """Tests for the two-step decoding of relay messages."""

    def test_wrap_then_parse_decodes_event(self, event: FixtureCancelledEvent):
        """The payload is a JSON string inside the JSON envelope."""
        body = ChangeCaptureEnvelope.wrap(event).to_json().encode()

        envelope = ChangeCaptureEnvelope.parse(body)

        assert isinstance(json.loads(body)["payload"], str)
        assert envelope.id == event.event_id
        assert envelope.decode_event() == event

    def test_parse_accepts_already_decoded_body(self, event: FixtureCancelledEvent):
        """FastStream may hand over a dict instead of bytes."""
        body = json.loads(ChangeCaptureEnvelope.wrap(event).to_json())

        assert ChangeCaptureEnvelope.parse(body).decode_event() == event

    def test_unknown_envelope_fields_are_ignored(self, event: FixtureCancelledEvent):
        """Relays add their own columns (e.g. routing metadata)."""
        body = json.loads(ChangeCaptureEnvelope.wrap(event).to_json())
        body["aggregate_id"] = str(event.fixture_id)
        body["__op"] = "c"

        assert ChangeCaptureEnvelope.parse(body).id == event.event_id

    def test_double_encoded_payload_is_accepted(self, event: FixtureCancelledEvent):
        """A payload string that wraps another JSON string still decodes."""
        envelope = ChangeCaptureEnvelope(id=event.event_id, payload=json.dumps(event.to_json()))

        assert envelope.decode_event() == event

    def test_body_that_is_not_json_is_rejected(self):
        with pytest.raises(DecodeException) as exc_info:
            ChangeCaptureEnvelope.parse(b"not json at all")

        assert exc_info.value.type == "malformed-envelope"
        assert exc_info.value.status_code == 400

    def test_body_without_id_is_rejected(self, event: FixtureCancelledEvent):
        with pytest.raises(DecodeException):
            ChangeCaptureEnvelope.parse({"payload": event.to_json()})

    def test_payload_that_is_not_json_is_rejected(self):
        envelope = ChangeCaptureEnvelope(id=uuid.uuid4(), payload="{broken")

        with pytest.raises(DecodeException) as exc_info:
            envelope.decode_event()

        assert exc_info.value.type == "malformed-payload"

    def test_payload_that_is_not_an_object_is_rejected(self):
        envelope = ChangeCaptureEnvelope(id=uuid.uuid4(), payload="[1, 2, 3]")

        with pytest.raises(DecodeException, match="JSON object"):
            envelope.decode_event()
