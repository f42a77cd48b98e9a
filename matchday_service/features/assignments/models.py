"""SQLAlchemy models for the assignments feature."""

from __future__ import annotations

from enum import StrEnum
import uuid

from sqlalchemy import Enum
from sqlalchemy.orm import Mapped, mapped_column

from matchday_service.core.database import Base, TimestampMixin
from matchday_service.core.exceptions import InvalidStateException


class AssignmentRole(StrEnum):
    FIRST = "First"
    SECOND = "Second"

    @property
    def slot(self) -> str:
        """Fixture referee slot this role fills (``"first"`` or ``"second"``)."""
        return self.value.lower()


class AssignmentStatus(StrEnum):
    STAGED = "Staged"
    COMMITTED = "Committed"


def _enum_column(enum_cls: type[StrEnum], name: str) -> Enum:
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
    )


class Assignment(Base, TimestampMixin):
    """A referee's role on a fixture, identified by the (fixture, referee) pair.

    Status moves Staged -> Committed only. Undoing a committed assignment
    deletes the row; it never returns to Staged.
    """

    __tablename__ = "assignments"

    fixture_id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    referee_id: Mapped[uuid.UUID] = mapped_column(primary_key=True, index=True)
    role: Mapped[AssignmentRole] = mapped_column(_enum_column(AssignmentRole, "assignment_role"), nullable=False)
    status: Mapped[AssignmentStatus] = mapped_column(
        _enum_column(AssignmentStatus, "assignment_status"),
        default=AssignmentStatus.STAGED,
        nullable=False,
        index=True,
    )

    @property
    def is_staged(self) -> bool:
        return self.status == AssignmentStatus.STAGED

    @property
    def is_committed(self) -> bool:
        return self.status == AssignmentStatus.COMMITTED

    def commit(self) -> None:
        if self.is_committed:
            raise InvalidStateException(
                f"Assignment of referee {self.referee_id} to fixture {self.fixture_id} is already committed",
                type="assignment-already-committed",
            )
        self.status = AssignmentStatus.COMMITTED

    def __repr__(self) -> str:
        return (
            f"<Assignment fixture_id={self.fixture_id} referee_id={self.referee_id} "
            f"role={self.role} status={self.status}>"
        )
