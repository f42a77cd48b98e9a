"""Logging infrastructure.

Provides structured logging with:
- JSONL format for log aggregation
- Automatic context injection (event_id, instance, ...)
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for expensive operations

Basic usage:
    import logging

    from matchday_service.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)
    lazy_logger = get_lazy_logger(__name__)

    set_log_context(event_id="0192...")
    logger.info("Dispatching event")  # Includes event_id
    lazy_logger.debug(lambda: f"Payload: {payload!r}")  # Only rendered at DEBUG
"""

from matchday_service.infra.logging.config import configure_logging, setup_logging, shutdown
from matchday_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    log_context,
    set_log_context,
)
from matchday_service.infra.logging.formatters import JSONFormatter
from matchday_service.infra.logging.lazy import LazyLoggerAdapter, LazyString, get_lazy_logger, lazy

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "lazy",
    "log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
