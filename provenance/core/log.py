"""
Structured logging for the provenance engine.

structlog with ISO timestamps, log level and snake_case event names.
Level and renderer come from LOG_LEVEL and LOG_FORMAT unless passed to
configure_logging. LOG_FORMAT=json gives aggregation-friendly output;
anything else renders for the console. Passage text is never logged,
only its length.
"""

import logging
import os
import sys
from typing import Optional

import structlog


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure structlog: timestamp, level, renderer."""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = (log_format or os.getenv("LOG_FORMAT", "console")).strip().lower()

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str = None):
    """Return a structlog logger bound to the module name."""
    if name:
        return structlog.get_logger(name).bind(component=name)
    return structlog.get_logger()
