"""Read models returned by the owning services and cached by the resolvers."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
import uuid

from pydantic import BaseModel, ConfigDict, Field


class FixtureStatus(StrEnum):
    SCHEDULED = "Scheduled"
    CANCELLED = "Cancelled"


class _DTO(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class VenueDTO(_DTO):
    id: uuid.UUID
    name: str
    street: str
    zip: str
    city: str
    telephone: str | None = None
    email: str | None = None


class TeamDTO(_DTO):
    id: uuid.UUID
    name: str
    club: str


class RefereeDTO(_DTO):
    id: uuid.UUID
    name: str
    club: str


class FixtureDTO(_DTO):
    """A fixture as served by the fixtures service, with its references expanded."""

    id: uuid.UUID
    date: datetime
    status: FixtureStatus = FixtureStatus.SCHEDULED
    venue: VenueDTO
    team_home: TeamDTO
    team_away: TeamDTO
    first_referee: RefereeDTO | None = Field(default=None)
    second_referee: RefereeDTO | None = Field(default=None)

    def referee_in_slot(self, slot: str) -> RefereeDTO | None:
        """Referee holding ``"first"`` or ``"second"``."""
        return self.first_referee if slot == "first" else self.second_referee
