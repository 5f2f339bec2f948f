"""Logging configuration for the abbrws command line tools."""

import logging
import sys

import structlog


def setup_logging(*, verbose: bool = False) -> None:
    """
    Configure structlog to write human readable lines to stderr.

    Only warnings are shown unless ``verbose`` is set, in which case the
    library's debug events (requests, digest challenges, cookies) are shown too.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )
