"""Repository for the venues feature."""

from __future__ import annotations

from matchday_service.core.database import BaseRepository
from matchday_service.features.venues.models import Venue


class VenueRepository(BaseRepository[Venue]):
    def __init__(self) -> None:
        super().__init__(Venue)


_venue_repository: VenueRepository | None = None


def get_venue_repository() -> VenueRepository:
    global _venue_repository
    if _venue_repository is None:
        _venue_repository = VenueRepository()
    return _venue_repository
