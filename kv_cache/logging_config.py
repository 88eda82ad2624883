"""Structured logging setup for hosts embedding the cache."""

import logging
from typing import Optional

import structlog

from kv_cache.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure structlog the way the cache's log events are meant to be read.

    The library logs through stdlib loggers named after its modules (see
    ``get_logger``) and stays silent until the host sets logging up; hosts that want
    JSON lines call this once at startup.

    Args:
        level: Logging level name. Defaults to ``settings.log_level``.
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(format="%(message)s", level=getattr(logging, level_name, logging.INFO))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger backed by the stdlib logger ``name``.

    Events end up in stdlib logging, so they stay silent until the host
    configures handlers (or calls ``configure_logging``).

    Args:
        name: The stdlib logger name, usually ``__name__``

    Returns:
        A lazily configured structlog logger
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger
    )
