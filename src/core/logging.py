"""
structlog setup for the outfit engine.

Events are snake_case names with key/value fields, rendered as colored
console lines locally and as one JSON object per line in production:

    from core.logging import configure_from_settings, get_logger

    configure_from_settings()
    logger = get_logger(__name__)
    logger.info("outfits_generated", requested=5, count=3, status="partial")
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

import structlog
from structlog.types import Processor

# stdlib loggers of the HTTP stacks under requests and supabase
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "urllib3")


def _build_processors(json_logs: bool, include_timestamp: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ))
    return processors


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        json_logs: JSON lines instead of the colored console renderer
        log_level: Root level name, case-insensitive ("debug", "INFO", ...)
        include_timestamp: Prefix events with an ISO timestamp
    """
    level = getattr(logging, log_level.upper())

    structlog.configure(
        processors=_build_processors(json_logs, include_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_from_settings(settings=None) -> None:
    """
    ``configure_logging`` driven by ``LOG_LEVEL`` / ``JSON_LOGS``.

    ``DEBUG=true`` forces the debug level; production always logs JSON.
    """
    if settings is None:
        from config.settings import get_settings
        settings = get_settings()
    configure_logging(
        json_logs=settings.json_logs or settings.is_production,
        log_level="DEBUG" if settings.debug else settings.log_level,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# ── Context variables ─────────────────────────────────────────────

def bind_context(**kwargs: Any) -> None:
    """Attach fields (``user_id=...``) to every later event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def bound_context(**kwargs: Any) -> Iterator[None]:
    """Fields bound only for the duration of the ``with`` block."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


class LoggerMixin:
    """Gives a class a ``logger`` named after the class."""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        return get_logger(self.__class__.__name__)
