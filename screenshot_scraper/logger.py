"""Logging setup shared by the scraper, the CLI and the API."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"
NAMESPACES = ("screenshot_scraper", "screenshot_api")


def setup_logging(level: Union[int, str] = logging.INFO, stream: Optional[object] = None) -> None:
    """
    Configure console logging for the application loggers.

    Args:
        level: Log level (int or name such as "DEBUG")
        stream: Output stream, stderr if None
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    for namespace in NAMESPACES:
        logger = logging.getLogger(namespace)
        logger.setLevel(level)
        logger.handlers.clear()
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Args:
        name: Module name (__name__)
    """
    return logging.getLogger(name)
