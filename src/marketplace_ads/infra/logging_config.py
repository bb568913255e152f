"""Process-wide logging setup for the ``marketplace_ads`` loggers.

Every module logs through ``logging.getLogger(__name__)``; this installs one
stderr handler on the package logger so they all share a format.
"""

from __future__ import annotations

import logging
import sys

from marketplace_ads.infra.config import log_level

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "marketplace_ads"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach the stderr handler once and set the level (LOG_LEVEL by default)."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level or log_level())

    # Prevent duplicate handlers on repeated calls (e.g. tests)
    if root_logger.handlers:
        return root_logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    root_logger.addHandler(handler)

    return root_logger
