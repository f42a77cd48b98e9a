"""SQLAlchemy models for the teams feature."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from matchday_service.core.database import Base, TimestampMixin, UUIDv7PKMixin


class Team(Base, UUIDv7PKMixin, TimestampMixin):
    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    club: Mapped[str] = mapped_column(String(200), nullable=False)
