"""Logging configuration setup.

Provides logging configuration using:
- dictConfig for the root logger level and filters
- QueueHandler + QueueListener for non-blocking I/O
- ContextInjectingFilter for automatic context propagation
- JSONL format for machine parsing
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from matchday_service.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from matchday_service.core.settings.logs import LoggingSettings

_log_queue: Queue[logging.LogRecord] | None = None
_listener: QueueListener | None = None
_LOGGING_INITIALIZED = False

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def shutdown() -> None:
    """Stop the QueueListener, flushing pending records.

    Registered with atexit when the listener starts; safe to call twice.
    """
    global _log_queue, _listener

    if _listener is not None:
        _listener.stop()
        _listener = None
    _log_queue = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from matchday_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **configure_kwargs})
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    service_name: str = "matchday-service",
    json_logs: bool = True,
    console_enabled: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    include_context: bool = True,
    capture_warnings: bool = True,
) -> None:
    """Configure logging with dictConfig and the QueueHandler pattern.

    All handlers hang off a QueueListener; the root logger only gets a
    QueueHandler, so logging calls never block on I/O.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Static ``service`` field stamped on JSON records.
        json_logs: Enable JSONL (JSON Lines) structured logging.
        console_enabled: Enable console/stderr logging.
        file_path: Path to a rotating log file. None disables file logging.
        file_max_bytes: Maximum log file size before rotation.
        file_backup_count: Number of rotated log files to keep.
        include_context: Enable ContextInjectingFilter for auto context.
        capture_warnings: Forward Python warnings to logging system.
    """
    if capture_warnings:
        logging.captureWarnings(True)

    shutdown()

    filters: dict[str, Any] = {}
    root_filters: list[str] = []
    if include_context:
        filters["context"] = {"()": "matchday_service.infra.logging.context.ContextInjectingFilter"}
        root_filters.append("context")

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": filters,
            "root": {"level": log_level.upper(), "handlers": [], "filters": root_filters},
        }
    )

    handlers = _build_handlers(
        service_name=service_name,
        json_logs=json_logs,
        console_enabled=console_enabled,
        file_path=Path(file_path) if file_path else None,
        file_max_bytes=file_max_bytes,
        file_backup_count=file_backup_count,
    )
    _setup_queue_logging(handlers)

    logger.debug(
        "Logging configured",
        extra={"level": log_level, "json_logs": json_logs, "handlers": len(handlers)},
    )


def _build_handlers(
    service_name: str,
    json_logs: bool,
    console_enabled: bool,
    file_path: Path | None,
    file_max_bytes: int,
    file_backup_count: int,
) -> list[logging.Handler]:
    def make_formatter() -> logging.Formatter:
        if json_logs:
            return JSONFormatter(static={"service": service_name})
        return logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = []

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(make_formatter())
        handlers.append(console_handler)

    if file_path:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=file_max_bytes,
            backupCount=file_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(make_formatter())
        handlers.append(file_handler)

    return handlers


def _setup_queue_logging(handlers: list[logging.Handler]) -> None:
    """Attach handlers to a QueueListener and give the root logger a QueueHandler."""
    global _log_queue, _listener

    _log_queue = Queue()

    if handlers:
        _listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
        _listener.start()
        atexit.register(shutdown)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, QueueHandler):
            root.removeHandler(existing)
    root.addHandler(QueueHandler(_log_queue))
