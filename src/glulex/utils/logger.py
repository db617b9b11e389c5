"""Minimal logging utilities for glulex.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure output.

Example:
    >>> from glulex.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Building pattern table")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "glulex." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'glulex.mymodule'
    """
    if not (name == "glulex" or name.startswith("glulex.")):
        name = f"glulex.{name}"
    return logging.getLogger(name)
