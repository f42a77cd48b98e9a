"""Base database model classes with composable mixins.

Every service keeps its aggregates, its outbox and its inbox in one metadata
so a single alembic history can create them; each deployment points at its
own database.

Examples:
    class Referee(Base, UUIDv7PKMixin, TimestampMixin):
        __tablename__ = "referees"
        name: Mapped[str] = mapped_column(String(200))
"""

from __future__ import annotations

from datetime import UTC, datetime
import uuid

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func
from uuid_utils import uuid7

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def generate_uuid7() -> uuid.UUID:
    """Generate a time-sortable UUID v7 as a stdlib ``uuid.UUID``."""
    return uuid.UUID(str(uuid7()))


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base carrying the shared metadata and naming convention."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:
        pk = getattr(self, "id", None)
        return f"<{type(self).__name__} id={pk!r}>"


# ============================================================================
# Primary Key Mixins
# ============================================================================


class UUIDv7PKMixin:
    """UUID v7 primary key (time-sortable).

    Provides:
        id: UUID v7 primary key (time-ordered)
    """

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=generate_uuid7,
        comment="UUID v7 primary key (time-sortable)",
    )


# ============================================================================
# Audit and Tracking Mixins
# ============================================================================


class CreatedAtMixin:
    """Creation timestamp for append-only tables (outbox, inbox)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        comment="Timestamp of record creation",
    )


class TimestampMixin(CreatedAtMixin):
    """Timestamp tracking for create and update operations.

    Provides:
        created_at: Timestamp of record creation (immutable)
        updated_at: Timestamp of last modification (auto-updates)
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp of last update",
    )
