"""Fixtures feature package."""

from .event_handlers import FixtureEventHandler
from .models import Fixture, RefereeSlot
from .repository import FixtureRepository, get_fixture_repository
from .service import FixtureService

__all__ = [
    "Fixture",
    "FixtureEventHandler",
    "FixtureRepository",
    "FixtureService",
    "RefereeSlot",
    "get_fixture_repository",
]
