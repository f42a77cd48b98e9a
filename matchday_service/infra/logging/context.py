"""Context management for structured logging.

Provides automatic context injection into log records using contextvars, so
the consumer can bind ``event_id``/``event_type``/``instance`` once per
message and every log line emitted while handling it carries them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Each async task gets its own copy automatically
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for current async task.

    Example:
        ```python
        set_log_context(event_id=str(envelope.id), instance="fixtures-1")
        logger.info("Dispatching")  # Includes event_id and instance
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for current async task."""
    _log_context.set({})


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind context for the duration of a block, restoring the previous context after.

    Example:
        ```python
        with log_context(event_id=event_id):
            await dispatch(event)
        ```
    """
    token = _log_context.set({**_log_context.get(), **kwargs})
    try:
        yield
    finally:
        _log_context.reset(token)


class ContextInjectingFilter(logging.Filter):
    """Logging filter that injects the contextvars log context into every LogRecord.

    Attached to the root logger by ``configure_logging`` so formatters
    (especially JSONFormatter) see context fields without call-site changes.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            # Don't overwrite existing attributes
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
