"""Read endpoints of the services that own remote aggregates."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceEndpointSettings(BaseSettings):
    """Base URLs the resolvers fetch DTOs from.

    Environment variables use SERVICES_ prefix.
    Example: SERVICES_FIXTURES_URL=http://fixtures:3000
    """

    fixtures_url: str = Field(
        default="http://localhost:3001",
        description="Base URL of the fixtures service read API.",
    )
    referees_url: str = Field(
        default="http://localhost:3002",
        description="Base URL of the referees service read API.",
    )
    teams_url: str = Field(
        default="http://localhost:3003",
        description="Base URL of the teams service read API.",
    )
    venues_url: str = Field(
        default="http://localhost:3004",
        description="Base URL of the venues service read API.",
    )
    timeout: float = Field(
        default=5.0,
        gt=0,
        le=60.0,
        description="Per-request timeout in seconds.",
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
