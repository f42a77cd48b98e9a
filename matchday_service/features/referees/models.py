"""SQLAlchemy models for the referees feature."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from matchday_service.core.database import Base, TimestampMixin, UUIDv7PKMixin


class Referee(Base, UUIDv7PKMixin, TimestampMixin):
    """A registered referee and the club they belong to."""

    __tablename__ = "referees"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    club: Mapped[str] = mapped_column(String(200), nullable=False, index=True)

    def change_club(self, club: str) -> bool:
        """Move to ``club``; returns False when already there."""
        if self.club == club:
            return False
        self.club = club
        return True
