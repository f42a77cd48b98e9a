"""SQLAlchemy models for the venues feature."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from matchday_service.core.database import Base, TimestampMixin, UUIDv7PKMixin


class Venue(Base, UUIDv7PKMixin, TimestampMixin):
    """A ground fixtures are played at."""

    __tablename__ = "venues"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    street: Mapped[str] = mapped_column(String(200), nullable=False)
    zip: Mapped[str] = mapped_column(String(20), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    telephone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
