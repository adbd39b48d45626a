"""Structured logging for PhishLens built on structlog.

Engine modules log snake_case events with key-value context, e.g.
``logger.warning("blacklist_lookup_timeout", url=url, timeout=3.0)``.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

import structlog


def _processors(debug: bool) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        # JSON lines carry the traceback as a string
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    return processors


def _file_handler(log_dir: str, max_bytes: int, backup_count: int) -> Optional[logging.Handler]:
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        return None
    return RotatingFileHandler(
        os.path.join(log_dir, "phishlens.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


def setup_logging(
    debug: bool = False,
    log_dir: Optional[str] = "logs",
    log_max_bytes: int = 10_000_000,
    log_backup_count: int = 5,
) -> None:
    """Configure structlog plus the stdlib root logger.

    Debug mode renders console lines, otherwise every event is one JSON
    object. Output goes to stdout and, when ``log_dir`` is set and writable,
    to a rotating ``phishlens.log`` file.
    """
    log_level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=_processors(debug),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Reconfiguration (uvicorn reload, tests) must not stack handlers
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        file_handler = _file_handler(log_dir, log_max_bytes, log_backup_count)
        if file_handler is not None:
            handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structured logger."""
    return structlog.get_logger(name)
