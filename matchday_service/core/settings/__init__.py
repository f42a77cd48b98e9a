"""Modular Pydantic Settings v2 configuration.

One settings class per concern, each with its own environment prefix,
exposed through LRU-cached loaders:

    from matchday_service.core.settings import get_db_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .app import AppSettings
from .consumer import ConsumerSettings, ServiceName
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_consumer_settings,
    get_db_settings,
    get_logging_settings,
    get_rabbit_settings,
    get_redis_settings,
    get_service_endpoint_settings,
)
from .logs import LoggingSettings
from .postgres import PostgresSettings
from .rabbit import RabbitSettings
from .redis import RedisSettings
from .services import ServiceEndpointSettings

__all__ = [
    "AppSettings",
    "ConsumerSettings",
    "LoggingSettings",
    "PostgresSettings",
    "RabbitSettings",
    "RedisSettings",
    "ServiceEndpointSettings",
    "ServiceName",
    "clear_all_caches",
    "get_app_settings",
    "get_consumer_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_rabbit_settings",
    "get_redis_settings",
    "get_service_endpoint_settings",
]
