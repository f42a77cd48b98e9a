"""Database engine and session factory with the psycopg3 async driver.

The engine is created on first use so importing command or handler modules
never opens a pool; tests build their own engine and session factory.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from matchday_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None

FALLBACK_URL = "sqlite+aiosqlite:///./matchday.db"


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory configuration shared by the service and the tests."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Return the process-wide async engine, creating it on first call."""
    global _engine

    if _engine is None:
        db_settings = get_db_settings()
        url = db_settings.get_sqlalchemy_url() if db_settings.is_configured else FALLBACK_URL
        engine_kwargs = db_settings.sqlalchemy_engine_kwargs()
        engine_kwargs["echo"] = engine_kwargs.get("echo", False) or get_app_settings().debug
        _engine = create_async_engine(url, **engine_kwargs)
        logger.debug("Created database engine", extra={"dialect": _engine.dialect.name})
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory."""
    global _session_factory

    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Example:
            async with get_async_session() as session:
            fixture = await session.get(Fixture, fixture_id)
    """
    async with get_session_factory()() as session:
        yield session


async def init_database() -> None:
    """Verify database connectivity at startup.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database cannot be reached.
    """
    engine = get_engine()
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"dialect": engine.dialect.name, "error": str(e)},
        )
        raise
    logger.info("Database connection established", extra={"dialect": engine.dialect.name})


async def close_database() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _session_factory

    if _engine is None:
        return

    logger.info("Closing database connection")
    await _engine.dispose()
    _engine = None
    _session_factory = None
