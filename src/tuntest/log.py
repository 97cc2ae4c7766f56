"""Logging setup for the harness.

Configure once at process start; library code only ever logs through the
``tuntest`` logger hierarchy or an explicitly passed logger.
"""

from __future__ import annotations

import logging
from typing import Optional


LOGGER_NAME = "tuntest"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(debug: bool = False, *, handler: Optional[logging.Handler] = None) -> logging.Logger:
    """
    Configure the ``tuntest`` logger and return it.

    Installs ``handler``, or a stderr stream handler when the logger has
    none yet, so calling this again without a handler only changes the
    level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)

    if handler is None and not logger.handlers:
        handler = logging.StreamHandler()
    if handler is not None and handler not in logger.handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for h in logger.handlers:
        h.setLevel(level)
    return logger


def debug_logging() -> logging.Logger:
    """Make the ``tuntest`` logger print debug messages."""
    return configure_logging(debug=True)
