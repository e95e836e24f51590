"""Structured logging setup.

Modules obtain a logger with ``get_logger(__name__)`` and log snake_case
event names with keyword context::

    logger.info("story_updated", slug="home", published=True)

Logs are written to stderr so they never interleave with the CLI's stdout
progress output.
"""

import logging
import sys
from typing import Optional

import structlog

from asset_sync_common.config import get_settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure structlog rendering and level filtering.

    Args:
        level: Log level name. Defaults to ``Settings.log_level``.
        fmt: ``"console"`` or ``"json"``. Defaults to ``Settings.log_format``.
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    log_format = (fmt or settings.log_format).lower()
    numeric_level = getattr(logging, level_name, logging.INFO)

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> structlog.typing.FilteringBoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
