"""Core database package: declarative base, mixins and the generic repository.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming convention
    - UUIDv7PKMixin: Time-sortable UUID primary key
    - CreatedAtMixin, TimestampMixin: created_at / updated_at tracking

Repository:
    - BaseRepository[T]: Thin persistence helpers with explicit session passing
"""

from __future__ import annotations

from .base import (
    NAMING_CONVENTION,
    Base,
    CreatedAtMixin,
    TimestampMixin,
    UUIDv7PKMixin,
    generate_uuid7,
    utcnow,
)
from .repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDv7PKMixin",
    "generate_uuid7",
    "utcnow",
]
