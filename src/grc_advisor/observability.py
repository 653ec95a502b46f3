"""Structured logging setup.

Modules obtain loggers with ``get_logger(__name__)`` and log event names with
keyword context. ``configure_logging`` is called once from the application
lifespan; until then structlog's defaults apply.
"""

import logging
from typing import Any

import structlog

from grc_advisor.settings import Settings


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to the given module name.

    Args:
        name: Logger name, normally ``__name__``.

    Returns:
        Bound structlog logger.
    """
    return structlog.get_logger(name)


def configure_logging(settings: Settings) -> None:
    """Configure structlog processors and the minimum log level.

    JSON output renders exceptions into the event dict; console output leaves
    them to the console renderer's own formatting.

    Args:
        settings: Service settings with log_level and log_json.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.log_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
