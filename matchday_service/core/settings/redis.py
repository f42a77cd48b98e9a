"""Redis cache configuration settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    """Redis settings for the resolver cache.

    Environment variables use REDIS_ prefix.
    Example: REDIS_URL="redis://localhost:6379/0"

    Cache entries carry no TTL; they are invalidated by event handlers.
    """

    redis_url: str | None = Field(
        default=None,
        alias="REDIS_URL",
        description="Redis connection URL (redis://[username:password@]host:port/db).",
    )
    key_prefix: str = Field(
        default="",
        max_length=50,
        description="Optional namespace prepended to every cache key (e.g. 'fixtures:').",
    )
    max_connections: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Maximum connections in the Redis connection pool",
    )
    socket_timeout: float = Field(
        default=5.0,
        gt=0,
        le=60.0,
        description="Socket read/write timeout in seconds",
    )
    socket_connect_timeout: float = Field(
        default=5.0,
        gt=0,
        le=60.0,
        description="Socket connect timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def url(self) -> str:
        """Effective connection URL (defaults to a local instance)."""
        return self.redis_url or "redis://localhost:6379/0"

    @property
    def is_configured(self) -> bool:
        """Check if an explicit Redis URL was provided."""
        return bool(self.redis_url)
