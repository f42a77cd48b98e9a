"""CLI helpers: async command wrapper and coloured output."""

from matchday_service.cli.utils.async_runner import coro
from matchday_service.cli.utils.formatters import error, fail, info, success, warning

__all__ = ["coro", "error", "fail", "info", "success", "warning"]
