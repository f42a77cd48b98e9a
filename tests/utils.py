"""Test utilities and helper functions.

Provides stand-ins for the pieces of the system that live outside one
service's process: the sibling services' read endpoints, the relay that
turns outbox rows into broker messages, and the documents those services
serve.

Usage:
    from tests.utils import RemoteServices, referee_doc

    remote = RemoteServices()
    referee = remote.add("referees", referee_doc(name="Pierluigi Collina"))
    resolvers = build_resolvers(cache, transport=remote.transport())
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
import uuid

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from matchday_service.core import models
from matchday_service.core.events import ChangeCaptureEnvelope
from matchday_service.core.exceptions import NotFoundException
from matchday_service.infra.events.outbox.models import OutboxRecord

if TYPE_CHECKING:
    from pydantic import BaseModel
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


# ============================================================================
# Database
# ============================================================================


async def create_test_engine() -> AsyncEngine:
    """In-memory SQLite database with every table created.

    StaticPool keeps the single connection alive so the schema survives
    across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.create_all)
    return engine


async def outbox_rows(session_factory: async_sessionmaker[AsyncSession]) -> list[OutboxRecord]:
    """Every outbox row written so far."""
    async with session_factory() as session:
        result = await session.execute(select(OutboxRecord))
        return list(result.scalars().all())


async def outbox_event_types(session_factory: async_sessionmaker[AsyncSession]) -> list[str]:
    return sorted(row.event_type for row in await outbox_rows(session_factory))


def relay(row: OutboxRecord) -> bytes:
    """Message body the change-capture relay would ship for ``row``."""
    envelope = ChangeCaptureEnvelope(id=row.id, payload=row.payload, created_at=row.created_at)
    return envelope.to_json().encode()


# ============================================================================
# Documents served by sibling services
# ============================================================================


def venue_doc(name: str = "Stadio Olimpico", **overrides: Any) -> dict[str, Any]:
    return {
        "id": str(uuid.uuid4()),
        "name": name,
        "street": "Viale dei Gladiatori",
        "zip": "00135",
        "city": "Roma",
        "telephone": None,
        "email": None,
        **overrides,
    }


def team_doc(name: str = "AS Roma U19", club: str = "AS Roma", **overrides: Any) -> dict[str, Any]:
    return {"id": str(uuid.uuid4()), "name": name, "club": club, **overrides}


def referee_doc(name: str = "Daniele Orsato", club: str = "AIA Schio", **overrides: Any) -> dict[str, Any]:
    return {"id": str(uuid.uuid4()), "name": name, "club": club, **overrides}


def fixture_doc(
    *,
    first_referee: dict[str, Any] | None = None,
    second_referee: dict[str, Any] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    return {
        "id": str(uuid.uuid4()),
        "date": datetime(2026, 11, 7, 15, 0, tzinfo=UTC).isoformat(),
        "status": "Scheduled",
        "venue": venue_doc(),
        "team_home": team_doc(),
        "team_away": team_doc(name="SS Lazio U19", club="SS Lazio"),
        "first_referee": first_referee,
        "second_referee": second_referee,
        **overrides,
    }


# ============================================================================
# Sibling services over httpx.MockTransport
# ============================================================================


class RemoteServices:
    """In-memory stand-in for the read endpoints of sibling services.

    Serves ``GET /{collection}/{id}`` either from stored documents or from a
    routed coroutine (for example a real ``FixtureService.get_fixture``), and
    records every request so tests can tell cache hits from fetches.
    """

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self.routes: dict[str, Callable[[uuid.UUID], Awaitable[BaseModel]]] = {}
        self.failing: set[str] = set()
        self.requests: list[str] = []

    def add(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        self.documents[collection][str(document["id"])] = document
        return document

    def remove(self, collection: str, entity_id: uuid.UUID | str) -> None:
        self.documents[collection].pop(str(entity_id), None)

    def route(self, collection: str, handler: Callable[[uuid.UUID], Awaitable[BaseModel]]) -> None:
        self.routes[collection] = handler

    def calls(self, collection: str) -> int:
        return sum(1 for path in self.requests if path.startswith(f"/{collection}/"))

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        _, collection, entity_id = request.url.path.split("/", 2)

        if collection in self.failing:
            return httpx.Response(503, json={"detail": "unavailable"})

        if collection in self.routes:
            try:
                dto = await self.routes[collection](uuid.UUID(entity_id))
            except NotFoundException as exc:
                return httpx.Response(404, json=exc.to_problem())
            return httpx.Response(200, json=dto.model_dump(mode="json"))

        document = self.documents[collection].get(entity_id)
        if document is None:
            return httpx.Response(404, json={"detail": f"{collection} {entity_id} not found"})
        return httpx.Response(200, json=document)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)
