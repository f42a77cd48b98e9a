"""Redis-backed cache for cross-service lookups."""

from matchday_service.infra.cache.redis import RedisCache, cache_key, get_cache

__all__ = ["RedisCache", "cache_key", "get_cache"]
