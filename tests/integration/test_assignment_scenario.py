"""End-to-end assignment scenario across the assignments and fixtures services.

Each service gets its own in-memory database. Outbox rows are relayed by
hand into the receiving service's consumer, standing in for the
change-capture relay and the broker.
"""

from __future__ import annotations

from datetime import UTC, datetime
import uuid

import pytest

from matchday_service.core.exceptions import ValidationException
from matchday_service.features.assignments import AssignmentRole, AssignmentService, AssignmentStatus
from matchday_service.features.fixtures import FixtureEventHandler, FixtureService
from matchday_service.infra.database import build_session_factory
from matchday_service.infra.events.consumer import ConsumeOutcome, DomainEventConsumer
from matchday_service.infra.events.handlers import LoggingEventHandler
from tests.utils import create_test_engine, outbox_rows, referee_doc, relay, team_doc, venue_doc

pytestmark = pytest.mark.integration


@pytest.fixture
async def fixtures_db():
    engine = await create_test_engine()
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
async def assignments_db():
    engine = await create_test_engine()
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def fixture_service(fixtures_db, resolvers, remote) -> FixtureService:
    service = FixtureService(fixtures_db, resolvers)
    remote.route("fixtures", service.get_fixture)
    return service


@pytest.fixture
def fixtures_consumer(fixtures_db, resolvers) -> DomainEventConsumer:
    return DomainEventConsumer(fixtures_db, FixtureEventHandler(resolvers.fixtures), instance="fixtures")


@pytest.fixture
def assignments_consumer(assignments_db) -> DomainEventConsumer:
    return DomainEventConsumer(assignments_db, LoggingEventHandler("assignments"), instance="assignments")


class Relay:
    """Ships each outbox row of one database once, in insertion order."""

    def __init__(self, session_factory, consumer: DomainEventConsumer) -> None:
        self._session_factory = session_factory
        self._consumer = consumer
        self.shipped: list[bytes] = []

    async def pending(self) -> list[bytes]:
        rows = sorted(await outbox_rows(self._session_factory), key=lambda row: row.created_at)
        bodies = [relay(row) for row in rows]
        return [body for body in bodies if body not in self.shipped]

    async def flush(self) -> list[ConsumeOutcome]:
        outcomes = []
        for body in await self.pending():
            outcomes.append(await self._consumer.process(body))
            self.shipped.append(body)
        return outcomes

    async def redeliver_all(self) -> list[ConsumeOutcome]:
        return [await self._consumer.process(body) for body in self.shipped]


async def test_assign_commit_and_unassign(
    fixtures_db, assignments_db, fixture_service, fixtures_consumer, assignments_consumer, resolvers, remote
):
    venue = uuid.UUID(remote.add("venues", venue_doc())["id"])
    home = uuid.UUID(remote.add("teams", team_doc())["id"])
    away = uuid.UUID(remote.add("teams", team_doc(name="SS Lazio U19", club="SS Lazio"))["id"])
    referee_a = uuid.UUID(remote.add("referees", referee_doc(name="Referee A"))["id"])
    referee_b = uuid.UUID(remote.add("referees", referee_doc(name="Referee B"))["id"])

    assignments = AssignmentService(assignments_db, resolvers)
    to_fixtures = Relay(assignments_db, fixtures_consumer)
    to_assignments = Relay(fixtures_db, assignments_consumer)

    # the fixtures service schedules the match; other services just log it
    fixture = await fixture_service.create_fixture(datetime(2026, 11, 7, 15, 0, tzinfo=UTC), venue, home, away)
    assert await to_assignments.flush() == [ConsumeOutcome.PROCESSED]

    # stage and commit both referees
    await assignments.stage(fixture.id, referee_a, AssignmentRole.FIRST)
    await assignments.stage(fixture.id, referee_b, AssignmentRole.SECOND)
    await assignments.commit_assignments()
    assert await to_fixtures.flush() == [ConsumeOutcome.PROCESSED, ConsumeOutcome.PROCESSED]

    resolved = await resolvers.fixtures.resolve(fixture.id)
    assert resolved.first_referee.id == referee_a
    assert resolved.second_referee.id == referee_b
    rows = await assignments.list_assignments()
    assert {a.referee_id for a in rows} == {referee_a, referee_b}
    assert all(a.status is AssignmentStatus.COMMITTED for a in rows)

    # unassign the first referee
    await assignments.remove_committed(fixture.id, referee_a)
    assert await to_fixtures.flush() == [ConsumeOutcome.PROCESSED]

    resolved = await resolvers.fixtures.resolve(fixture.id)
    assert resolved.first_referee is None
    assert resolved.second_referee.id == referee_b
    (remaining,) = await assignments.list_assignments()
    assert remaining.referee_id == referee_b
    assert remaining.status is AssignmentStatus.COMMITTED

    # the broker redelivers everything: nothing is applied twice
    assert await to_fixtures.redeliver_all() == [ConsumeOutcome.DUPLICATE] * 3
    assert await to_assignments.redeliver_all() == [ConsumeOutcome.DUPLICATE]
    resolved = await resolvers.fixtures.resolve(fixture.id)
    assert resolved.first_referee is None
    assert resolved.second_referee.id == referee_b


async def test_second_referee_for_taken_role_is_rejected(
    fixtures_db, assignments_db, fixture_service, fixtures_consumer, resolvers, remote
):
    """A committed role cannot be claimed by a second staged referee."""
    venue = uuid.UUID(remote.add("venues", venue_doc())["id"])
    home = uuid.UUID(remote.add("teams", team_doc())["id"])
    away = uuid.UUID(remote.add("teams", team_doc(name="SS Lazio U19", club="SS Lazio"))["id"])
    referee_a = uuid.UUID(remote.add("referees", referee_doc(name="Referee A"))["id"])
    referee_c = uuid.UUID(remote.add("referees", referee_doc(name="Referee C"))["id"])

    assignments = AssignmentService(assignments_db, resolvers)
    to_fixtures = Relay(assignments_db, fixtures_consumer)
    fixture = await fixture_service.create_fixture(datetime(2026, 11, 7, 15, 0, tzinfo=UTC), venue, home, away)

    await assignments.stage(fixture.id, referee_a, AssignmentRole.FIRST)
    await assignments.commit_assignments()
    await to_fixtures.flush()

    # A holds the first slot; staging C for it fails validation at commit
    await assignments.stage(fixture.id, referee_c, AssignmentRole.FIRST)
    with pytest.raises(ValidationException) as exc_info:
        await assignments.commit_assignments()

    assert exc_info.value.type == "assignment-role-conflict"
    assert len(await outbox_rows(assignments_db)) == 1
