"""Database infrastructure: engine/session factory and the unit of work."""

from matchday_service.infra.database.session import (
    build_session_factory,
    close_database,
    get_async_session,
    get_engine,
    get_session_factory,
    init_database,
)
from matchday_service.infra.database.unit_of_work import UnitOfWork

__all__ = [
    "UnitOfWork",
    "build_session_factory",
    "close_database",
    "get_async_session",
    "get_engine",
    "get_session_factory",
    "init_database",
]
