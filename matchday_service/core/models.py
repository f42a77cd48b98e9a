"""Every mapped table, imported in one place.

Alembic's ``env.py`` and the test suite import this module so that
``Base.metadata`` knows about all tables before it is used.
"""

from __future__ import annotations

from matchday_service.core.database.base import Base
from matchday_service.features.assignments.models import Assignment
from matchday_service.features.availabilities.models import Availability
from matchday_service.features.fixtures.models import Fixture
from matchday_service.features.referees.models import Referee
from matchday_service.features.teams.models import Team
from matchday_service.features.venues.models import Venue
from matchday_service.infra.events.inbox.models import InboxRecord
from matchday_service.infra.events.outbox.models import OutboxRecord

__all__ = [
    "Assignment",
    "Availability",
    "Base",
    "Fixture",
    "InboxRecord",
    "OutboxRecord",
    "Referee",
    "Team",
    "Venue",
]
