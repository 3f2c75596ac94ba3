"""Minimal logging utilities for marksafe.

Provides a simple get_logger function that wraps the standard library logging.
The library never configures handlers; the host application decides where
degradation warnings go.

Example:
    >>> from marksafe.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rejected link target")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "marksafe." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'marksafe.mymodule'
    """
    if not (name == "marksafe" or name.startswith("marksafe.")):
        name = f"marksafe.{name}"
    return logging.getLogger(name)
