"""Structured logging configuration using structlog.

Key Features:
- Development: Pretty console output with colors
- Production: JSON output for log aggregation
"""

from __future__ import annotations

import logging
import sys
from typing import cast

import structlog

from truth_engine.core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for the engine.

    In development (DEBUG=true):
        - Pretty console output with colors

    In production (DEBUG=false):
        - JSON output for log aggregation

    Args:
        settings: Optional settings override. Defaults to cached settings.
    """
    settings = settings or get_settings()

    log_level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Shared processors for both dev and prod
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.debug:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            # JSONRenderer must be last
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A structured logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
