"""
Logging setup.

Configures loguru logger for the CLI. Diagnostics go to stderr so that
stdout carries only the human-readable run report.
"""

import sys

from loguru import logger


LOG_FORMAT = "{time:HH:mm:ss} | {level} | {message}"


def setup_logging(level: str = "WARNING") -> None:
    """Configure logger with a single stderr sink."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)

    logger.debug(f"Logging configured at level {level}")
