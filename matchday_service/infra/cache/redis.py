"""Redis cache client for resolver DTOs.

Values are JSON documents stored without a TTL. Entries leave the cache
only through ``delete``, which callback handlers call when the owning
service announces a change.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, cast

from redis.asyncio import ConnectionPool, Redis

from matchday_service.core.settings import get_redis_settings
from matchday_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    import uuid
    from collections.abc import Awaitable

    from matchday_service.core.settings import RedisSettings

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


def cache_key(entity: str, entity_id: uuid.UUID | str) -> str:
    """Cache key for one aggregate, e.g. ``fixture_0192f0c1-...``."""
    return f"{entity}_{entity_id}"


class RedisCache:
    """Redis cache client with connection pooling.

    Example:
        cache = RedisCache()
        await cache.connect()

        await cache.set("referee_0192...", {"id": "0192...", "name": "Jane"})
        value = await cache.get("referee_0192...")
        await cache.delete("referee_0192...")

        await cache.disconnect()
    """

    def __init__(self, settings: RedisSettings | None = None) -> None:
        self._settings = settings or get_redis_settings()
        self._pool: ConnectionPool | None = None
        self._client: Redis | None = None

    async def connect(self) -> None:
        """Open the connection pool and ping the server.

        Raises:
            redis.exceptions.ConnectionError: If Redis is unreachable.
        """
        logger.info(
            "Connecting to Redis",
            extra={
                "max_connections": self._settings.max_connections,
                "socket_timeout": self._settings.socket_timeout,
            },
        )
        try:
            self._pool = ConnectionPool.from_url(
                self._settings.url,
                max_connections=self._settings.max_connections,
                socket_timeout=self._settings.socket_timeout,
                socket_connect_timeout=self._settings.socket_connect_timeout,
                decode_responses=True,
            )
            self._client = Redis(connection_pool=self._pool)
            await cast("Awaitable[bool]", self._client.ping())
        except Exception as e:
            logger.exception("Failed to connect to Redis", extra={"error": str(e)})
            raise
        logger.info("Redis connection established successfully")

    async def disconnect(self) -> None:
        """Close Redis connection and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
        if self._pool:
            await self._pool.aclose()
            self._pool = None
        logger.info("Redis connection closed")

    @property
    def client(self) -> Redis:
        if self._client is None:
            msg = "Redis client not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._client

    def _key(self, key: str) -> str:
        return f"{self._settings.key_prefix}{key}"

    async def get(self, key: str) -> Any | None:
        """Return the decoded JSON value, or None on a miss."""
        raw = await self.client.get(self._key(key))
        lazy_logger.debug(lambda: f"cache.get({key}) -> {'hit' if raw is not None else 'miss'}")
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` as JSON with no expiry."""
        await self.client.set(self._key(key), json.dumps(value, default=str))
        lazy_logger.debug(lambda: f"cache.set({key})")

    async def delete(self, key: str) -> bool:
        """Remove ``key``; returns whether it existed."""
        removed = await self.client.delete(self._key(key))
        logger.debug("Cache entry invalidated", extra={"cache_key": key, "existed": bool(removed)})
        return bool(removed)


_cache: RedisCache | None = None


def get_cache() -> RedisCache:
    """Get the shared RedisCache instance (not yet connected)."""
    global _cache
    if _cache is None:
        _cache = RedisCache()
    return _cache
