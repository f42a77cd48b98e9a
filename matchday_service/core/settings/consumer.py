"""Domain event consumer settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ServiceName = Literal[
    "assignments",
    "availabilities",
    "fixtures",
    "referees",
    "teams",
    "venues",
]


class ConsumerSettings(BaseSettings):
    """Which service this process consumes events for, and under what identity.

    Environment variables use CONSUMER_ prefix.
    Example: CONSUMER_SERVICE=fixtures, CONSUMER_INSTANCE=fixtures

    ``instance`` is written into every inbox row and is half of the inbox
    key. All replicas of one service must share it: the broker may redeliver
    a message to a different replica, and that replica has to see the row.
    """

    service: ServiceName = Field(
        default="fixtures",
        description="Service whose callback handlers this consumer dispatches to.",
    )
    instance: str | None = Field(
        default=None,
        max_length=100,
        description="Inbox instance tag shared by all replicas. Defaults to the service name.",
    )
    queue: str | None = Field(
        default=None,
        max_length=200,
        description="Queue name. Defaults to '{RABBIT_QUEUE_PREFIX}.{service}.domain-events'.",
    )

    model_config = SettingsConfigDict(
        env_prefix="CONSUMER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @model_validator(mode="after")
    def _default_instance(self) -> ConsumerSettings:
        if not self.instance:
            object.__setattr__(self, "instance", self.service)
        return self

    def queue_name(self, queue_prefix: str) -> str:
        """Resolve the queue this consumer binds to."""
        return self.queue or f"{queue_prefix}.{self.service}.domain-events"
