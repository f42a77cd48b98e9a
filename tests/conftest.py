"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings that keep tests off real infrastructure
    - Database Fixtures: in-memory SQLite engine and session factory
    - Cache Fixtures: dict-backed RedisCache double
    - Resolver Fixtures: resolvers wired to in-memory sibling services
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator
import json
import os
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest

from matchday_service.core.settings import ServiceEndpointSettings, clear_all_caches
from matchday_service.infra.cache.redis import RedisCache
from matchday_service.infra.database.session import build_session_factory
from matchday_service.infra.external.resolvers import build_resolvers
from tests.utils import RemoteServices, create_test_engine

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

    from matchday_service.infra.external.resolvers import Resolvers

# Ensure tests run without external infrastructure
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("RABBIT_ENABLED", "false")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("CONSUMER_SERVICE", "fixtures")


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop cached settings so env changes made by a test stay local to it."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with the full schema."""
    engine = await create_test_engine()
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured exactly like the service's own."""
    return build_session_factory(db_engine)


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def cache_store() -> dict[str, Any]:
    """Backing dict of ``mock_cache``; inspect it to see what is cached."""
    return {}


@pytest.fixture
def mock_cache(cache_store: dict[str, Any]) -> AsyncMock:
    """RedisCache double storing JSON-normalized values in ``cache_store``.

    Example:
        async def test_resolve(mock_cache, cache_store):
            await mock_cache.set("referee_1", {"id": "1"})
            assert "referee_1" in cache_store
    """
    cache = AsyncMock(spec=RedisCache)

    async def get(key: str) -> Any | None:
        return cache_store.get(key)

    async def set_(key: str, value: Any) -> None:
        cache_store[key] = json.loads(json.dumps(value, default=str))

    async def delete(key: str) -> bool:
        return cache_store.pop(key, None) is not None

    cache.get.side_effect = get
    cache.set.side_effect = set_
    cache.delete.side_effect = delete
    return cache


# ============================================================================
# Resolver Fixtures
# ============================================================================


@pytest.fixture
def remote() -> RemoteServices:
    """Sibling services' read endpoints, empty until a test adds documents."""
    return RemoteServices()


@pytest.fixture
async def resolvers(mock_cache: AsyncMock, remote: RemoteServices) -> AsyncGenerator[Resolvers]:
    """Cache-aside resolvers talking to ``remote`` through httpx.MockTransport."""
    resolvers = build_resolvers(mock_cache, ServiceEndpointSettings(), transport=remote.transport())
    try:
        yield resolvers
    finally:
        await resolvers.close()
