"""The closed catalog of domain events exchanged between matchday services.

Each event carries the aggregate identifiers a consumer needs and, for a few,
one scalar (a new date, a club name). Consumers never need to call back to
the producer to make sense of an event.

| Event                                | Aggregate | Produced by      |
|--------------------------------------|-----------|------------------|
| RefereeCreatedEvent                  | referee   | referees         |
| RefereeClubChangedEvent              | referee   | referees         |
| TeamCreatedEvent                     | team      | teams            |
| VenueCreatedEvent                    | venue     | venues           |
| FixtureCreatedEvent                  | fixture   | fixtures         |
| FixtureDateChangedEvent              | fixture   | fixtures         |
| FixtureVenueChangedEvent             | fixture   | fixtures         |
| FixtureCancelledEvent                | fixture   | fixtures         |
| AvailabilityDeclaredEvent            | fixture   | availabilities   |
| AvailabilityWithdrawnEvent           | fixture   | availabilities   |
| FirstRefereeAssignedEvent            | fixture   | assignments      |
| SecondRefereeAssignedEvent           | fixture   | assignments      |
| FirstRefereeAssignmentRemovedEvent   | fixture   | assignments      |
| SecondRefereeAssignmentRemovedEvent  | fixture   | assignments      |
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar
import uuid

from pydantic import Field

from matchday_service.core.events.base import DomainEvent
from matchday_service.core.events.registry import event_registry

# ──────────────────────────────────────────────────────────────────────────────
# Referees
# ──────────────────────────────────────────────────────────────────────────────


@event_registry.register
class RefereeCreatedEvent(DomainEvent):
    """Published when a referee is registered."""

    event_type: ClassVar[str] = "referee.created"
    aggregate_type: ClassVar[str] = "referee"
    aggregate_field: ClassVar[str] = "referee_id"

    referee_id: uuid.UUID = Field(description="Id of the new referee")


@event_registry.register
class RefereeClubChangedEvent(DomainEvent):
    """Published when a referee moves to another club.

    Services caching the referee DTO must drop their entry.
    """

    event_type: ClassVar[str] = "referee.club_changed"
    aggregate_type: ClassVar[str] = "referee"
    aggregate_field: ClassVar[str] = "referee_id"

    referee_id: uuid.UUID = Field(description="Id of the referee")
    club_name: str = Field(min_length=1, description="Name of the new club")


# ──────────────────────────────────────────────────────────────────────────────
# Teams and venues
# ──────────────────────────────────────────────────────────────────────────────


@event_registry.register
class TeamCreatedEvent(DomainEvent):
    """Published when a team is registered."""

    event_type: ClassVar[str] = "team.created"
    aggregate_type: ClassVar[str] = "team"
    aggregate_field: ClassVar[str] = "team_id"

    team_id: uuid.UUID = Field(description="Id of the new team")


@event_registry.register
class VenueCreatedEvent(DomainEvent):
    """Published when a venue is registered."""

    event_type: ClassVar[str] = "venue.created"
    aggregate_type: ClassVar[str] = "venue"
    aggregate_field: ClassVar[str] = "venue_id"

    venue_id: uuid.UUID = Field(description="Id of the new venue")


# ──────────────────────────────────────────────────────────────────────────────
# Fixtures
# ──────────────────────────────────────────────────────────────────────────────


class FixtureEvent(DomainEvent):
    """Intermediate base for everything keyed by a fixture."""

    event_type: ClassVar[str] = "fixture.event"
    aggregate_type: ClassVar[str] = "fixture"
    aggregate_field: ClassVar[str] = "fixture_id"

    fixture_id: uuid.UUID = Field(description="Id of the fixture")


@event_registry.register
class FixtureCreatedEvent(FixtureEvent):
    """Published when a fixture is scheduled."""

    event_type: ClassVar[str] = "fixture.created"


@event_registry.register
class FixtureDateChangedEvent(FixtureEvent):
    """Published when a fixture is moved to another kick-off time."""

    event_type: ClassVar[str] = "fixture.date_changed"

    date: datetime = Field(description="New kick-off time (UTC)")


@event_registry.register
class FixtureVenueChangedEvent(FixtureEvent):
    """Published when a fixture is moved to another venue."""

    event_type: ClassVar[str] = "fixture.venue_changed"

    venue_id: uuid.UUID = Field(description="Id of the new venue")


@event_registry.register
class FixtureCancelledEvent(FixtureEvent):
    """Published when a fixture is cancelled."""

    event_type: ClassVar[str] = "fixture.cancelled"


# ──────────────────────────────────────────────────────────────────────────────
# Availabilities
# ──────────────────────────────────────────────────────────────────────────────


@event_registry.register
class AvailabilityDeclaredEvent(FixtureEvent):
    """Published when a referee declares availability for a fixture."""

    event_type: ClassVar[str] = "availability.declared"

    referee_id: uuid.UUID = Field(description="Id of the referee")


@event_registry.register
class AvailabilityWithdrawnEvent(FixtureEvent):
    """Published when a referee withdraws availability for a fixture."""

    event_type: ClassVar[str] = "availability.withdrawn"

    referee_id: uuid.UUID = Field(description="Id of the referee")


# ──────────────────────────────────────────────────────────────────────────────
# Assignments
# ──────────────────────────────────────────────────────────────────────────────


class RefereeSlotEvent(FixtureEvent):
    """Intermediate base for events that fill or clear a fixture referee slot."""

    event_type: ClassVar[str] = "assignment.event"
    slot: ClassVar[str] = ""

    referee_id: uuid.UUID = Field(description="Id of the referee")


@event_registry.register
class FirstRefereeAssignedEvent(RefereeSlotEvent):
    """Published when a first-referee assignment is committed."""

    event_type: ClassVar[str] = "assignment.first_referee_assigned"
    slot: ClassVar[str] = "first"


@event_registry.register
class SecondRefereeAssignedEvent(RefereeSlotEvent):
    """Published when a second-referee assignment is committed."""

    event_type: ClassVar[str] = "assignment.second_referee_assigned"
    slot: ClassVar[str] = "second"


@event_registry.register
class FirstRefereeAssignmentRemovedEvent(RefereeSlotEvent):
    """Published when a committed first-referee assignment is removed."""

    event_type: ClassVar[str] = "assignment.first_referee_removed"
    slot: ClassVar[str] = "first"


@event_registry.register
class SecondRefereeAssignmentRemovedEvent(RefereeSlotEvent):
    """Published when a committed second-referee assignment is removed."""

    event_type: ClassVar[str] = "assignment.second_referee_removed"
    slot: ClassVar[str] = "second"


type CatalogEvent = (
    RefereeCreatedEvent
    | RefereeClubChangedEvent
    | TeamCreatedEvent
    | VenueCreatedEvent
    | FixtureCreatedEvent
    | FixtureDateChangedEvent
    | FixtureVenueChangedEvent
    | FixtureCancelledEvent
    | AvailabilityDeclaredEvent
    | AvailabilityWithdrawnEvent
    | FirstRefereeAssignedEvent
    | SecondRefereeAssignedEvent
    | FirstRefereeAssignmentRemovedEvent
    | SecondRefereeAssignmentRemovedEvent
)
