"""SQLAlchemy models for the fixtures feature.

The fixture owns two referee slots. The fixtures service never fills them
from a command: they change only when the assignments service announces a
committed or removed assignment.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal
import uuid

from sqlalchemy import DateTime, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column

from matchday_service.core.database import Base, TimestampMixin, UUIDv7PKMixin
from matchday_service.core.exceptions import ConflictException, InvalidStateException
from matchday_service.infra.external.schemas import FixtureStatus

type RefereeSlot = Literal["first", "second"]


def as_utc(value: datetime) -> datetime:
    """Normalize a kick-off time to aware UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Fixture(Base, UUIDv7PKMixin, TimestampMixin):
    """A scheduled match between two teams at a venue."""

    __tablename__ = "fixtures"
    __table_args__ = (
        Index("ix_fixtures_venue_id_date", "venue_id", "date"),
    )

    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    status: Mapped[FixtureStatus] = mapped_column(
        Enum(
            FixtureStatus,
            name="fixture_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=FixtureStatus.SCHEDULED,
        nullable=False,
    )
    venue_id: Mapped[uuid.UUID] = mapped_column(nullable=False)
    team_home_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    team_away_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    first_referee_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    second_referee_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

    @property
    def is_cancelled(self) -> bool:
        return self.status == FixtureStatus.CANCELLED

    def cancel(self) -> None:
        if self.is_cancelled:
            raise InvalidStateException(
                f"Fixture {self.id} is already cancelled",
                type="fixture-already-cancelled",
                extra={"fixture_id": str(self.id)},
            )
        self.status = FixtureStatus.CANCELLED

    def change_date(self, date: datetime) -> None:
        self.date = as_utc(date)

    def change_venue(self, venue_id: uuid.UUID) -> None:
        self.venue_id = venue_id

    def referee_in_slot(self, slot: RefereeSlot) -> uuid.UUID | None:
        return self.first_referee_id if slot == "first" else self.second_referee_id

    def _set_slot(self, slot: RefereeSlot, referee_id: uuid.UUID | None) -> None:
        if slot == "first":
            self.first_referee_id = referee_id
        else:
            self.second_referee_id = referee_id

    def assign_referee(self, slot: RefereeSlot, referee_id: uuid.UUID) -> bool:
        """Fill an empty slot.

        Returns False when ``referee_id`` already holds the slot.

        Raises:
            ConflictException: Another referee holds the slot.
        """
        current = self.referee_in_slot(slot)
        if current == referee_id:
            return False
        if current is not None:
            raise ConflictException(
                f"{slot.capitalize()} referee slot of fixture {self.id} is held by {current}",
                type="referee-slot-occupied",
                extra={"fixture_id": str(self.id), "slot": slot, "held_by": str(current)},
            )
        self._set_slot(slot, referee_id)
        return True

    def remove_referee(self, slot: RefereeSlot, referee_id: uuid.UUID) -> bool:
        """Clear a slot held by ``referee_id``; returns False if it is not."""
        if self.referee_in_slot(slot) != referee_id:
            return False
        self._set_slot(slot, None)
        return True
