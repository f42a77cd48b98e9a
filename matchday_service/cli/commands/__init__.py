"""CLI command modules."""

from matchday_service.cli.commands import consume, db

__all__ = ["consume", "db"]
