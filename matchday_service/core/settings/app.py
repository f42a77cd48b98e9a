"""Application identity settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(BaseSettings):
    """Service identity shared by every matchday process.

    Environment variables use APP_ prefix.
    Example: APP_SERVICE_NAME=matchday-fixtures, APP_ENVIRONMENT=production
    """

    service_name: str = Field(
        default="matchday-service",
        min_length=1,
        max_length=100,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Service name for logging (lowercase, hyphens allowed)",
    )
    environment: Environment = Field(
        default="development",
        description="Environment: development|staging|production|test",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug behaviour (verbose SQL echo is controlled separately by DB_ECHO)",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
