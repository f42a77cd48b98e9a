"""Venues feature package."""

from .models import Venue
from .repository import VenueRepository, get_venue_repository
from .schemas import VenueCreate
from .service import VenueService

__all__ = ["Venue", "VenueCreate", "VenueRepository", "VenueService", "get_venue_repository"]
