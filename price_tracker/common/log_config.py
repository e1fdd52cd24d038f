"""
Logging Configuration

Routes tracker logs to stderr so stdout carries only the CLI's JSON.
With --verbose the HTTP and SQL layers underneath (urllib3, SQLAlchemy)
log through the same handler, which is usually what you want when a
storefront starts returning odd pages.
"""

import logging
import sys

PACKAGE_LOGGER = "price_tracker"

# Library loggers that stay at WARNING unless verbose
LIBRARY_LOGGERS = ("urllib3", "sqlalchemy.engine")

DEFAULT_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Handler:
    """
    Configure the tracker's stderr handler.

    Args:
        verbose: DEBUG for the tracker, INFO for request and SQL logs,
            timestamps on every line. Wins over quiet.
        quiet: WARNING only

    Returns:
        The installed handler
    """
    if verbose:
        level, fmt = logging.DEBUG, VERBOSE_FORMAT
    elif quiet:
        level, fmt = logging.WARNING, DEFAULT_FORMAT
    else:
        level, fmt = logging.INFO, DEFAULT_FORMAT

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))

    # Re-running replaces the handler instead of stacking a second one
    for name in (PACKAGE_LOGGER, *LIBRARY_LOGGERS):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = name == PACKAGE_LOGGER

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.addHandler(handler)

    for name in LIBRARY_LOGGERS:
        library_logger = logging.getLogger(name)
        library_logger.setLevel(logging.INFO if verbose else logging.WARNING)
        library_logger.addHandler(handler)

    return handler
