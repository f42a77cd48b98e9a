"""SQLAlchemy models for the availabilities feature."""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Mapped, mapped_column

from matchday_service.core.database import Base, CreatedAtMixin


class Availability(Base, CreatedAtMixin):
    """A referee's declaration that they can officiate a fixture."""

    __tablename__ = "availabilities"

    fixture_id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    referee_id: Mapped[uuid.UUID] = mapped_column(primary_key=True, index=True)

    def __repr__(self) -> str:
        return f"<Availability fixture_id={self.fixture_id} referee_id={self.referee_id}>"
