"""Structured logger configuration for the worker.

The worker runs unattended inside a container, so every log line goes to
stderr and is rendered as JSON by default. Set ``LOG_FORMAT=console`` to get
the human-readable renderer while developing locally.
"""

import logging
import os
import sys

import structlog


def configure_logging(level: str = None, fmt: str = None):
    """Configure structlog for the worker process.

    Args:
        level: Minimum log level name. Falls back to ``LOG_LEVEL`` or INFO.
        fmt: ``json`` or ``console``. Falls back to ``LOG_FORMAT`` or json.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    renderer_name = (fmt or os.getenv("LOG_FORMAT", "json")).lower()

    if renderer_name == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# Configure logging when module is imported
configure_logging()

# Export configured logger
logger = structlog.get_logger()
