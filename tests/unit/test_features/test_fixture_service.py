"""Unit tests for FixtureService scheduling rules."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import json
import uuid

import pytest

from matchday_service.core.exceptions import (
    ConflictException,
    InvalidStateException,
    NotFoundException,
    ResolutionException,
    ValidationException,
)
from matchday_service.features.fixtures import FixtureService
from matchday_service.infra.external.schemas import FixtureStatus
from tests.utils import outbox_event_types, outbox_rows, team_doc, venue_doc

KICK_OFF = datetime(2026, 11, 7, 15, 0, tzinfo=UTC)


@pytest.fixture
def service(session_factory, resolvers) -> FixtureService:
    return FixtureService(session_factory, resolvers)


@pytest.fixture
def venue(remote) -> uuid.UUID:
    return uuid.UUID(remote.add("venues", venue_doc())["id"])


@pytest.fixture
def teams(remote) -> list[uuid.UUID]:
    docs = [
        team_doc(name="AS Roma U19"),
        team_doc(name="SS Lazio U19", club="SS Lazio"),
        team_doc(name="Frosinone U19", club="Frosinone"),
        team_doc(name="Latina U19", club="Latina"),
    ]
    return [uuid.UUID(remote.add("teams", doc)["id"]) for doc in docs]


class TestCreateFixture:
    async def test_create_publishes_event(self, service, session_factory, venue, teams):
        home, away, *_ = teams

        fixture = await service.create_fixture(KICK_OFF, venue, home, away)

        assert fixture.status is FixtureStatus.SCHEDULED
        assert fixture.venue.id == venue
        assert (fixture.team_home.id, fixture.team_away.id) == (home, away)
        assert fixture.first_referee is None
        (row,) = await outbox_rows(session_factory)
        assert row.event_type == "fixture.created"
        assert row.aggregate_id == str(fixture.id)

    async def test_same_teams_rejected(self, service, session_factory, venue, teams):
        with pytest.raises(ValidationException):
            await service.create_fixture(KICK_OFF, venue, teams[0], teams[0])

        assert await outbox_rows(session_factory) == []

    async def test_unknown_venue_rejected(self, service, teams):
        with pytest.raises(ResolutionException):
            await service.create_fixture(KICK_OFF, uuid.uuid4(), teams[0], teams[1])

    async def test_venue_clash_same_day(self, service, session_factory, venue, teams):
        await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])

        with pytest.raises(ConflictException) as exc_info:
            await service.create_fixture(KICK_OFF + timedelta(hours=3), venue, teams[2], teams[3])

        assert exc_info.value.type == "fixture-venue-clash"
        assert await outbox_event_types(session_factory) == ["fixture.created"]

    async def test_team_clash_same_day(self, service, remote, venue, teams):
        other_venue = uuid.UUID(remote.add("venues", venue_doc(name="Stadio Flaminio"))["id"])
        await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])

        with pytest.raises(ConflictException) as exc_info:
            await service.create_fixture(KICK_OFF, other_venue, teams[2], teams[1])

        assert exc_info.value.type == "fixture-team-clash"

    async def test_next_day_does_not_clash(self, service, venue, teams):
        await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])

        fixture = await service.create_fixture(KICK_OFF + timedelta(days=1), venue, teams[0], teams[1])

        assert fixture.venue.id == venue

    async def test_cancelled_fixture_does_not_clash(self, service, venue, teams):
        first = await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])
        await service.cancel_fixture(first.id)

        replacement = await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])

        assert replacement.id != first.id


class TestFixtureLifecycle:
    async def test_cancel_twice_is_invalid(self, service, session_factory, venue, teams):
        fixture = await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])
        await service.cancel_fixture(fixture.id)

        with pytest.raises(InvalidStateException):
            await service.cancel_fixture(fixture.id)

        assert await outbox_event_types(session_factory) == ["fixture.cancelled", "fixture.created"]

    async def test_cancel_unknown_fixture(self, service):
        with pytest.raises(NotFoundException):
            await service.cancel_fixture(uuid.uuid4())

    async def test_change_date_publishes_new_date(self, service, session_factory, venue, teams):
        fixture = await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])
        moved = KICK_OFF + timedelta(days=7)

        await service.change_fixture_date(fixture.id, moved)

        rows = {row.event_type: row for row in await outbox_rows(session_factory)}
        payload = json.loads(rows["fixture.date_changed"].payload)
        assert datetime.fromisoformat(payload["date"]) == moved

    async def test_change_venue_requires_known_venue(self, service, session_factory, venue, teams):
        fixture = await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])

        with pytest.raises(ResolutionException):
            await service.change_fixture_venue(fixture.id, uuid.uuid4())

        assert await outbox_event_types(session_factory) == ["fixture.created"]

    async def test_change_venue(self, service, session_factory, remote, venue, teams):
        fixture = await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])
        other_venue = uuid.UUID(remote.add("venues", venue_doc(name="Stadio Flaminio"))["id"])

        await service.change_fixture_venue(fixture.id, other_venue)

        assert (await service.get_fixture(fixture.id)).venue.id == other_venue
        assert "fixture.venue_changed" in await outbox_event_types(session_factory)


class TestGetFixture:
    async def test_expands_references(self, service, remote, venue, teams):
        created = await service.create_fixture(KICK_OFF, venue, teams[0], teams[1])
        requests_before = len(remote.requests)

        fixture = await service.get_fixture(created.id)

        assert fixture.venue == created.venue
        assert fixture.team_home == created.team_home
        assert fixture.team_away == created.team_away
        assert fixture.first_referee is None
        assert fixture.second_referee is None
        # venue and teams were cached when the fixture was created
        assert len(remote.requests) == requests_before

    async def test_unknown_fixture(self, service):
        with pytest.raises(NotFoundException):
            await service.get_fixture(uuid.uuid4())
