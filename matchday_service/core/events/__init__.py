"""Domain event system.

- DomainEvent: immutable base class for all events
- catalog: the closed set of events exchanged between services
- EventRegistry / event_registry: type-string to class mapping for deserialization
- ChangeCaptureEnvelope: the relay's wire format around a string-encoded event
- TransactionalPublisher: the begin/commit/rollback + publish contract commands use

Usage:
    from matchday_service.core.events import FixtureCancelledEvent

    async with UnitOfWork(session_factory) as uow:
        fixture.cancel()
        await uow.publish(FixtureCancelledEvent(fixture_id=fixture.id))
"""

from __future__ import annotations

from matchday_service.core.events.base import DomainEvent
from matchday_service.core.events.catalog import (
    AvailabilityDeclaredEvent,
    AvailabilityWithdrawnEvent,
    CatalogEvent,
    FirstRefereeAssignedEvent,
    FirstRefereeAssignmentRemovedEvent,
    FixtureCancelledEvent,
    FixtureCreatedEvent,
    FixtureDateChangedEvent,
    FixtureEvent,
    FixtureVenueChangedEvent,
    RefereeClubChangedEvent,
    RefereeCreatedEvent,
    RefereeSlotEvent,
    SecondRefereeAssignedEvent,
    SecondRefereeAssignmentRemovedEvent,
    TeamCreatedEvent,
    VenueCreatedEvent,
)
from matchday_service.core.events.envelope import ChangeCaptureEnvelope
from matchday_service.core.events.publisher import TransactionalPublisher
from matchday_service.core.events.registry import EventRegistry, event_registry

__all__ = [
    "AvailabilityDeclaredEvent",
    "AvailabilityWithdrawnEvent",
    "CatalogEvent",
    "ChangeCaptureEnvelope",
    "DomainEvent",
    "EventRegistry",
    "FirstRefereeAssignedEvent",
    "FirstRefereeAssignmentRemovedEvent",
    "FixtureCancelledEvent",
    "FixtureCreatedEvent",
    "FixtureDateChangedEvent",
    "FixtureEvent",
    "FixtureVenueChangedEvent",
    "RefereeClubChangedEvent",
    "RefereeCreatedEvent",
    "RefereeSlotEvent",
    "SecondRefereeAssignedEvent",
    "SecondRefereeAssignmentRemovedEvent",
    "TeamCreatedEvent",
    "TransactionalPublisher",
    "VenueCreatedEvent",
    "event_registry",
]
