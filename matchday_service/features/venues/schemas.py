"""Input schemas for the venues feature."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class VenueCreate(BaseModel):
    """Fields required to register a venue."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    street: str = Field(min_length=1, max_length=200)
    zip: str = Field(min_length=1, max_length=20)
    city: str = Field(min_length=1, max_length=100)
    telephone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
