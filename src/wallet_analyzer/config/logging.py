"""Logging configuration using structlog."""

import logging
import sys

import structlog

from wallet_analyzer.config.settings import get_settings


def configure_logging() -> None:
    """Configure structlog for the application.

    Logs go to stderr: stdout is reserved for the stdio tool protocol.
    """
    settings = get_settings()

    # Set log level
    log_level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            # Use JSON in production, pretty print in debug
            structlog.dev.ConsoleRenderer()
            if settings.debug
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # Also configure standard logging for third-party libraries (httpx, mcp)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
