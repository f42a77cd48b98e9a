"""Unit tests for the cache-aside resolvers."""

from __future__ import annotations

import uuid

import pytest

from matchday_service.core.exceptions import ResolutionException
from matchday_service.infra.external import FixtureDTO, RefereeDTO
from tests.utils import fixture_doc, referee_doc


class TestResolve:
    """Cache miss fetches and stores; cache hit does not call out."""

    async def test_miss_fetches_and_caches(self, resolvers, remote, cache_store):
        referee = remote.add("referees", referee_doc())
        referee_id = uuid.UUID(referee["id"])

        dto = await resolvers.referees.resolve(referee_id)

        assert isinstance(dto, RefereeDTO)
        assert dto.name == referee["name"]
        assert cache_store[f"referee_{referee_id}"]["club"] == referee["club"]
        assert remote.calls("referees") == 1

    async def test_hit_skips_remote(self, resolvers, remote):
        referee = remote.add("referees", referee_doc())

        await resolvers.referees.resolve(uuid.UUID(referee["id"]))
        await resolvers.referees.resolve(uuid.UUID(referee["id"]))

        assert remote.calls("referees") == 1

    async def test_cached_entry_is_served_without_refresh(self, resolvers, remote):
        """Entries have no TTL: a stale entry stays until invalidated."""
        referee = remote.add("referees", referee_doc(club="AIA Roma 1"))
        referee_id = uuid.UUID(referee["id"])
        await resolvers.referees.resolve(referee_id)

        referee["club"] = "AIA Milano"

        assert (await resolvers.referees.resolve(referee_id)).club == "AIA Roma 1"

    async def test_invalidate_forces_refetch(self, resolvers, remote, cache_store):
        referee = remote.add("referees", referee_doc(club="AIA Roma 1"))
        referee_id = uuid.UUID(referee["id"])
        await resolvers.referees.resolve(referee_id)
        referee["club"] = "AIA Milano"

        await resolvers.referees.invalidate(referee_id)

        assert f"referee_{referee_id}" not in cache_store
        assert (await resolvers.referees.resolve(referee_id)).club == "AIA Milano"
        assert remote.calls("referees") == 2

    async def test_unreadable_cache_entry_is_replaced(self, resolvers, remote, cache_store):
        referee = remote.add("referees", referee_doc())
        referee_id = uuid.UUID(referee["id"])
        cache_store[f"referee_{referee_id}"] = {"id": "garbage"}

        dto = await resolvers.referees.resolve(referee_id)

        assert dto.id == referee_id
        assert cache_store[f"referee_{referee_id}"]["name"] == referee["name"]

    async def test_fixture_expands_nested_documents(self, resolvers, remote):
        first = referee_doc()
        fixture = remote.add("fixtures", fixture_doc(first_referee=first))

        dto = await resolvers.fixtures.resolve(uuid.UUID(fixture["id"]))

        assert isinstance(dto, FixtureDTO)
        assert dto.referee_in_slot("first").id == uuid.UUID(first["id"])
        assert dto.referee_in_slot("second") is None
        assert dto.team_home.club == "AS Roma"

    def test_key_convention(self, resolvers):
        entity_id = uuid.uuid4()

        assert resolvers.fixtures.key(entity_id) == f"fixture_{entity_id}"
        assert resolvers.venues.key(entity_id) == f"venue_{entity_id}"


class TestResolutionErrors:
    """Anything short of a valid DTO is a ResolutionException."""

    async def test_unknown_id(self, resolvers, cache_store):
        missing = uuid.uuid4()

        with pytest.raises(ResolutionException, match="not found") as exc_info:
            await resolvers.teams.resolve(missing)

        assert exc_info.value.extra["status_code"] == 404
        assert exc_info.value.status_code == 502
        assert cache_store == {}

    async def test_service_error(self, resolvers, remote):
        remote.failing.add("venues")

        with pytest.raises(ResolutionException) as exc_info:
            await resolvers.venues.resolve(uuid.uuid4())

        assert exc_info.value.extra["status_code"] == 503

    async def test_body_not_matching_dto(self, resolvers, remote, cache_store):
        referee = remote.add("referees", {"id": str(uuid.uuid4()), "name": "No Club"})

        with pytest.raises(ResolutionException, match="does not match"):
            await resolvers.referees.resolve(uuid.UUID(referee["id"]))

        assert cache_store == {}
