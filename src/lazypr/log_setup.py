"""Logging setup for lazypr.

Log records go to stderr so that stdout stays clean for generated content.
"""

import logging
import sys

import structlog


def setup_logging(log_level: str = "WARNING", is_verbose: bool = False) -> None:
    """Configure structlog.

    Args:
        log_level: Level name used when not verbose
        is_verbose: Force DEBUG logging
    """
    level = logging.DEBUG if is_verbose else logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
