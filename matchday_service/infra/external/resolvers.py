"""Cache-aside resolvers for aggregates owned by other services.

``resolve(id)`` reads ``{entity}_{id}`` from Redis; on a miss it fetches
``GET {base_url}/{collection}/{id}``, validates the body into the DTO and
stores it without expiry. Nothing refreshes an entry: it stays until a
callback handler calls ``invalidate(id)``.

Any failure to produce a DTO raises ``ResolutionException`` so callers
decide between abort and retry.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from matchday_service.core.exceptions import ResolutionException
from matchday_service.core.settings import get_service_endpoint_settings
from matchday_service.infra.cache.redis import cache_key
from matchday_service.infra.external.base_client import BaseHTTPClient
from matchday_service.infra.external.schemas import FixtureDTO, RefereeDTO, TeamDTO, VenueDTO

if TYPE_CHECKING:
    import uuid

    from matchday_service.core.settings import ServiceEndpointSettings
    from matchday_service.infra.cache.redis import RedisCache

logger = logging.getLogger(__name__)


class CachedResolver[T: BaseModel]:
    """Read-through lookup of one remote aggregate type."""

    entity: str
    collection: str
    dto_type: type[T]

    def __init__(self, client: BaseHTTPClient, cache: RedisCache) -> None:
        self._client = client
        self._cache = cache

    def key(self, entity_id: uuid.UUID) -> str:
        return cache_key(self.entity, entity_id)

    async def resolve(self, entity_id: uuid.UUID) -> T:
        """Return the DTO for ``entity_id``, from cache when present.

        Raises:
            ResolutionException: The owning service does not know the id, is
                unreachable, or returned a body that does not validate.
        """
        key = self.key(entity_id)
        cached = await self._cache.get(key)
        if cached is not None:
            try:
                return self.dto_type.model_validate(cached)
            except ValidationError:
                logger.warning("Discarding unreadable cache entry", extra={"cache_key": key})
                await self._cache.delete(key)

        dto = await self._fetch(entity_id)
        await self._cache.set(key, dto.model_dump(mode="json"))
        return dto

    async def invalidate(self, entity_id: uuid.UUID) -> None:
        """Drop the cached DTO so the next ``resolve`` refetches it."""
        key = self.key(entity_id)
        await self._cache.delete(key)
        logger.info("Cache entry invalidated", extra={"cache_key": key})

    async def close(self) -> None:
        await self._client.close()

    async def _fetch(self, entity_id: uuid.UUID) -> T:
        path = f"/{self.collection}/{entity_id}"
        extra = {"entity": self.entity, "entity_id": str(entity_id)}
        try:
            data = await self._client.get(path)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == httpx.codes.NOT_FOUND:
                detail = f"{self.entity.capitalize()} {entity_id} not found"
            else:
                detail = f"{self.entity.capitalize()} {entity_id} lookup failed with HTTP {status}"
            raise ResolutionException(detail=detail, extra={**extra, "status_code": status}) from exc
        except httpx.TransportError as exc:
            raise ResolutionException(
                detail=f"{self.entity.capitalize()} service unreachable: {exc.__class__.__name__}",
                extra=extra,
            ) from exc
        except ValueError as exc:
            raise ResolutionException(
                detail=f"{self.entity.capitalize()} {entity_id} response is not JSON",
                extra=extra,
            ) from exc

        try:
            return self.dto_type.model_validate(data)
        except ValidationError as exc:
            raise ResolutionException(
                detail=f"{self.entity.capitalize()} {entity_id} response does not match {self.dto_type.__name__}",
                extra={**extra, "errors": exc.errors(include_url=False)},
            ) from exc


class FixtureResolver(CachedResolver[FixtureDTO]):
    entity = "fixture"
    collection = "fixtures"
    dto_type = FixtureDTO


class RefereeResolver(CachedResolver[RefereeDTO]):
    entity = "referee"
    collection = "referees"
    dto_type = RefereeDTO


class TeamResolver(CachedResolver[TeamDTO]):
    entity = "team"
    collection = "teams"
    dto_type = TeamDTO


class VenueResolver(CachedResolver[VenueDTO]):
    entity = "venue"
    collection = "venues"
    dto_type = VenueDTO


@dataclass(frozen=True, slots=True)
class Resolvers:
    """The four resolvers a service may need, sharing one cache."""

    fixtures: FixtureResolver
    referees: RefereeResolver
    teams: TeamResolver
    venues: VenueResolver

    async def close(self) -> None:
        for resolver in (self.fixtures, self.referees, self.teams, self.venues):
            await resolver.close()


def build_resolvers(
    cache: RedisCache,
    endpoints: ServiceEndpointSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Resolvers:
    """Create one HTTP client per owning service and wrap it in its resolver."""
    endpoints = endpoints or get_service_endpoint_settings()

    def client(base_url: str) -> BaseHTTPClient:
        return BaseHTTPClient(base_url, timeout=endpoints.timeout, transport=transport)

    return Resolvers(
        fixtures=FixtureResolver(client(endpoints.fixtures_url), cache),
        referees=RefereeResolver(client(endpoints.referees_url), cache),
        teams=TeamResolver(client(endpoints.teams_url), cache),
        venues=VenueResolver(client(endpoints.venues_url), cache),
    )
