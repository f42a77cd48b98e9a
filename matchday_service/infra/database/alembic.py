"""Programmatic Alembic command interface with async support.

Example:
    from matchday_service.infra.database.alembic import get_alembic_commands

    commands = get_alembic_commands()
    output = await commands.upgrade("head")
    revision = await commands.current()
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from alembic import command
from alembic.config import Config

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]


@dataclass
class AlembicCommandConfig:
    """Where the migration scripts live and which engine they run against.

    Attributes:
        engine: SQLAlchemy async engine for database operations
        script_location: Path to alembic scripts directory
        render_as_batch: Enable batch mode for migrations (required for SQLite)
    """

    engine: AsyncEngine
    script_location: str = str(PROJECT_ROOT / "alembic")
    ini_path: Path = PROJECT_ROOT / "alembic.ini"
    render_as_batch: bool = False

    def get_alembic_config(self, output_buffer: io.StringIO | None = None) -> Config:
        """Build an Alembic Config whose URL and options come from the engine.

        Raises:
            FileNotFoundError: If alembic.ini is missing.
        """
        if not self.ini_path.exists():
            raise FileNotFoundError(f"alembic.ini not found at {self.ini_path}")

        config = Config(str(self.ini_path), stdout=output_buffer or io.StringIO())
        config.set_main_option("script_location", self.script_location)
        # render_as_string keeps the password (str() masks it)
        config.set_main_option("sqlalchemy.url", self.engine.url.render_as_string(hide_password=False))
        config.attributes["render_as_batch"] = self.render_as_batch
        # keep the service's logging setup
        config.attributes["skip_logging_config"] = True
        return config


class AlembicCommands:
    """Runs Alembic commands in a worker thread so the event loop stays free."""

    def __init__(self, config: AlembicCommandConfig) -> None:
        self.config = config

    async def upgrade(self, revision: str = "head", *, sql: bool = False) -> str:
        """Upgrade database to ``revision`` and return Alembic's output."""
        logger.info("Upgrading database", extra={"revision": revision, "sql": sql})
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)

        def _run() -> None:
            command.upgrade(alembic_config, revision, sql=sql)

        await asyncio.to_thread(_run)
        logger.info("Upgrade completed", extra={"revision": revision})
        return output.getvalue()

    async def downgrade(self, revision: str = "-1", *, sql: bool = False) -> str:
        logger.info("Downgrading database", extra={"revision": revision, "sql": sql})
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)

        def _run() -> None:
            command.downgrade(alembic_config, revision, sql=sql)

        await asyncio.to_thread(_run)
        return output.getvalue()

    async def current(self, *, verbose: bool = False) -> str:
        """Show current database revision."""
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)

        def _run() -> None:
            command.current(alembic_config, verbose=verbose)

        await asyncio.to_thread(_run)
        return output.getvalue()


def get_alembic_commands(engine: AsyncEngine | None = None) -> AlembicCommands:
    """AlembicCommands bound to ``engine`` (default: the service engine)."""
    if engine is None:
        from matchday_service.infra.database.session import get_engine

        engine = get_engine()

    return AlembicCommands(
        AlembicCommandConfig(engine=engine, render_as_batch=engine.dialect.name == "sqlite"),
    )


__all__ = ["AlembicCommandConfig", "AlembicCommands", "get_alembic_commands"]
