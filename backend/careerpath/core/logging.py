"""Structured logging configuration.

Request-scoped fields (method, path, user_id, role) live in structlog's
contextvars and are merged into every event logged while the request runs.
"""

import logging
import sys
from typing import Any

import structlog

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "openai", "aiosqlite")


def _processors(debug: bool) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
    ]


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=_processors(debug),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def bind_request(method: str, path: str) -> None:
    """Start a fresh log context for an incoming request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=method, path=path)


def bind_caller(user_id: str, role: str) -> None:
    """Attach the authenticated caller to the current log context."""
    structlog.contextvars.bind_contextvars(user_id=user_id, role=role)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger(name)
    # structlog.get_logger returns Any
    return logger  # type: ignore[no-any-return]
