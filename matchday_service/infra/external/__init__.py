"""Clients and cache-aside resolvers for sibling services' read APIs."""

from matchday_service.infra.external.base_client import BaseHTTPClient
from matchday_service.infra.external.resolvers import (
    CachedResolver,
    FixtureResolver,
    RefereeResolver,
    Resolvers,
    TeamResolver,
    VenueResolver,
    build_resolvers,
)
from matchday_service.infra.external.schemas import (
    FixtureDTO,
    FixtureStatus,
    RefereeDTO,
    TeamDTO,
    VenueDTO,
)

__all__ = [
    "BaseHTTPClient",
    "CachedResolver",
    "FixtureDTO",
    "FixtureResolver",
    "FixtureStatus",
    "RefereeDTO",
    "RefereeResolver",
    "Resolvers",
    "TeamDTO",
    "TeamResolver",
    "VenueDTO",
    "VenueResolver",
    "build_resolvers",
]
