"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from matchday_service.core.settings.loader import get_consumer_settings

    settings = get_consumer_settings()  # First call: loads and validates
    settings = get_consumer_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    get_consumer_settings.cache_clear()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .consumer import ConsumerSettings
from .logs import LoggingSettings
from .postgres import PostgresSettings
from .rabbit import RabbitSettings
from .redis import RedisSettings
from .services import ServiceEndpointSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> PostgresSettings:
    """Get cached database settings."""
    return PostgresSettings()


@lru_cache(maxsize=1)
def get_rabbit_settings() -> RabbitSettings:
    """Get cached RabbitMQ settings."""
    return RabbitSettings()


@lru_cache(maxsize=1)
def get_redis_settings() -> RedisSettings:
    """Get cached Redis settings."""
    return RedisSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_consumer_settings() -> ConsumerSettings:
    """Get cached consumer settings."""
    return ConsumerSettings()


@lru_cache(maxsize=1)
def get_service_endpoint_settings() -> ServiceEndpointSettings:
    """Get cached read-endpoint settings."""
    return ServiceEndpointSettings()


def clear_all_caches() -> None:
    """Clear every settings cache (tests and config reloads)."""
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()
    get_rabbit_settings.cache_clear()
    get_redis_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_consumer_settings.cache_clear()
    get_service_endpoint_settings.cache_clear()
