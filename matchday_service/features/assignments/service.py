"""The assignment saga: stage, validate, commit and unassign.

Staging touches only the local ``assignments`` table. Committing turns each
staged row into a "referee assigned" event for the fixtures service, and
removing a committed row emits the matching "assignment removed" event.
The saga never writes a fixture slot itself; the fixtures service does that
when it consumes the event.

``commit_assignments`` runs one transaction per assignment. Each step
re-reads its row and skips it unless it is still Staged, so re-running the
command after a crash commits only what is left.
Events emitted by one run share a correlation id.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from matchday_service.core.events import (
    FirstRefereeAssignedEvent,
    FirstRefereeAssignmentRemovedEvent,
    SecondRefereeAssignedEvent,
    SecondRefereeAssignmentRemovedEvent,
)
from matchday_service.core.exceptions import (
    InvalidStateException,
    NotFoundException,
    ValidationException,
)
from matchday_service.core.database.base import generate_uuid7
from matchday_service.core.services import BaseService
from matchday_service.features.assignments.models import Assignment, AssignmentRole, AssignmentStatus
from matchday_service.features.assignments.repository import (
    AssignmentRepository,
    get_assignment_repository,
)
from matchday_service.features.assignments.schemas import AssignmentDTO

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from matchday_service.core.events import RefereeSlotEvent
    from matchday_service.infra.external.resolvers import Resolvers

ASSIGNED_EVENTS: dict[AssignmentRole, type[RefereeSlotEvent]] = {
    AssignmentRole.FIRST: FirstRefereeAssignedEvent,
    AssignmentRole.SECOND: SecondRefereeAssignedEvent,
}
REMOVED_EVENTS: dict[AssignmentRole, type[RefereeSlotEvent]] = {
    AssignmentRole.FIRST: FirstRefereeAssignmentRemovedEvent,
    AssignmentRole.SECOND: SecondRefereeAssignmentRemovedEvent,
}


def _not_found(fixture_id: uuid.UUID, referee_id: uuid.UUID) -> NotFoundException:
    return NotFoundException(
        f"Assignment with fixture_id {fixture_id} and referee_id {referee_id} not found",
        type="assignment-not-found",
        extra={"fixture_id": str(fixture_id), "referee_id": str(referee_id)},
    )


class AssignmentService(BaseService):
    """Drives the assignment lifecycle for the assignments service."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        resolvers: Resolvers,
        repository: AssignmentRepository | None = None,
    ) -> None:
        super().__init__(session_factory)
        self._resolvers = resolvers
        self._repository = repository or get_assignment_repository()

    async def stage(
        self,
        fixture_id: uuid.UUID,
        referee_id: uuid.UUID,
        role: AssignmentRole,
    ) -> AssignmentDTO:
        """Upsert the pair as Staged with ``role``; emits nothing.

        Raises:
            ResolutionException: Fixture or referee cannot be resolved.
            InvalidStateException: The pair is already committed.
        """
        fixture = await self._resolvers.fixtures.resolve(fixture_id)
        referee = await self._resolvers.referees.resolve(referee_id)
        role = AssignmentRole(role)

        async with self.unit_of_work() as uow:
            existing = await self._repository.lookup(uow.session, fixture.id, referee.id)
            if existing is not None and existing.is_committed:
                raise InvalidStateException(
                    f"Assignment with fixture_id {fixture.id} and referee_id {referee.id} is already committed",
                    type="assignment-committed",
                    extra={"fixture_id": str(fixture.id), "referee_id": str(referee.id)},
                )
            assignment = await self._repository.save(
                uow.session,
                Assignment(
                    fixture_id=fixture.id,
                    referee_id=referee.id,
                    role=role,
                    status=AssignmentStatus.STAGED,
                ),
            )
            dto = AssignmentDTO.model_validate(assignment)

        self.logger.info(
            "Assignment staged",
            extra={
                "fixture_id": str(fixture_id),
                "referee_id": str(referee_id),
                "role": role.value,
                "restaged": existing is not None,
            },
        )
        return dto

    async def remove_staged(self, fixture_id: uuid.UUID, referee_id: uuid.UUID) -> None:
        """Delete a staged assignment.

        Raises:
            NotFoundException: No assignment for the pair.
            InvalidStateException: The assignment is committed.
        """
        async with self.unit_of_work() as uow:
            assignment = await self._repository.lookup(uow.session, fixture_id, referee_id)
            if assignment is None:
                raise _not_found(fixture_id, referee_id)
            if assignment.is_committed:
                raise InvalidStateException(
                    f"Assignment with fixture_id {fixture_id} and referee_id {referee_id} not staged",
                    type="assignment-not-staged",
                )
            await self._repository.delete(uow.session, assignment)

    async def remove_committed(self, fixture_id: uuid.UUID, referee_id: uuid.UUID) -> None:
        """Unassign a committed referee and tell the fixtures service to clear the slot.

        The removal event and the row delete commit together.

        Raises:
            NotFoundException: No assignment for the pair.
            InvalidStateException: The assignment is only staged.
            ResolutionException: The fixture cannot be resolved.
            ValidationException: The referee does not hold the slot its role claims.
        """
        async with self.unit_of_work() as uow:
            assignment = await self._repository.lookup(uow.session, fixture_id, referee_id)
            if assignment is None:
                raise _not_found(fixture_id, referee_id)
            if assignment.is_staged:
                raise InvalidStateException(
                    f"Assignment with fixture_id {fixture_id} and referee_id {referee_id} not committed",
                    type="assignment-not-committed",
                )

            fixture = await self._resolvers.fixtures.resolve(fixture_id)
            slot = assignment.role.slot
            holder = fixture.referee_in_slot(slot)
            if holder is None or holder.id != referee_id:
                raise ValidationException(
                    f"{assignment.role.value} referee not assigned for fixture {fixture.id}",
                    type="referee-slot-mismatch",
                    extra={
                        "fixture_id": str(fixture.id),
                        "slot": slot,
                        "held_by": str(holder.id) if holder else None,
                    },
                )

            await uow.publish(REMOVED_EVENTS[assignment.role](fixture_id=fixture.id, referee_id=referee_id))
            await self._repository.delete(uow.session, assignment)

        self.logger.info(
            "Committed assignment removed",
            extra={"fixture_id": str(fixture_id), "referee_id": str(referee_id), "slot": slot},
        )

    async def validate_assignments(self) -> None:
        """Check the staged set before committing.

        Only a structural rule is enforced: each fixture role may be held by
        at most one assignment, staged or committed.

        Raises:
            ValidationException: Listing every fixture role claimed twice.
        """
        async with self.unit_of_work() as uow:
            assignments = await self._repository.find_all(uow.session)

        claims = Counter((a.fixture_id, a.role) for a in assignments)
        duplicates = sorted(
            (f"{fixture_id}:{role.value}" for (fixture_id, role), count in claims.items() if count > 1),
        )
        if duplicates:
            raise ValidationException(
                "Fixture roles claimed by more than one referee",
                type="assignment-role-conflict",
                extra={"conflicts": duplicates},
            )
        self._lazy.debug(lambda: f"service.validate_assignments -> {len(assignments)} assignments ok")

    async def commit_assignments(self) -> list[AssignmentDTO]:
        """Validate, then commit every staged assignment in its own transaction.

        Raises:
            ValidationException: Validation failed, or a fixture slot is held
                by a different referee.
            ResolutionException: A fixture or referee cannot be resolved;
                items committed before it stay committed.
        """
        await self.validate_assignments()

        async with self.unit_of_work() as uow:
            pending = [(a.fixture_id, a.referee_id) for a in await self._repository.find_staged(uow.session)]

        correlation_id = str(generate_uuid7())
        committed: list[AssignmentDTO] = []
        for fixture_id, referee_id in pending:
            dto = await self._commit_one(fixture_id, referee_id, correlation_id)
            if dto is not None:
                committed.append(dto)

        self.logger.info(
            "Assignments committed",
            extra={"staged": len(pending), "committed": len(committed), "correlation_id": correlation_id},
        )
        return committed

    async def _commit_one(
        self,
        fixture_id: uuid.UUID,
        referee_id: uuid.UUID,
        correlation_id: str,
    ) -> AssignmentDTO | None:
        fixture = await self._resolvers.fixtures.resolve(fixture_id)
        referee = await self._resolvers.referees.resolve(referee_id)

        async with self.unit_of_work() as uow:
            assignment = await self._repository.lookup(uow.session, fixture_id, referee_id)
            if assignment is None or not assignment.is_staged:
                self._lazy.debug(lambda: f"service.commit_assignments: skip {fixture_id}/{referee_id}")
                return None

            holder = fixture.referee_in_slot(assignment.role.slot)
            if holder is not None and holder.id != referee.id:
                raise ValidationException(
                    f"{assignment.role.value} referee slot of fixture {fixture.id} is held by {holder.id}",
                    type="referee-slot-occupied",
                    extra={"fixture_id": str(fixture.id), "referee_id": str(referee.id)},
                )

            await uow.publish(
                ASSIGNED_EVENTS[assignment.role](
                    fixture_id=fixture.id,
                    referee_id=referee.id,
                    correlation_id=correlation_id,
                )
            )
            assignment.commit()
            await uow.session.flush()
            return AssignmentDTO.model_validate(assignment)

    async def list_assignments(self) -> list[AssignmentDTO]:
        async with self.unit_of_work() as uow:
            assignments = await self._repository.find_all(uow.session)
            return [AssignmentDTO.model_validate(a) for a in assignments]


__all__ = ["ASSIGNED_EVENTS", "REMOVED_EVENTS", "AssignmentService"]
