"""Application logging setup.

Everything goes through ``app.logger`` (the ``catalog`` logger) and a single
stream handler, so request handlers only ever call ``current_app.logger``.
"""

from __future__ import annotations

import logging
import sys

from flask import Flask
from flask.logging import default_handler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(app: Flask) -> logging.Logger:
    logger = app.logger
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)
    logger.removeHandler(default_handler)

    # Repeated create_app() calls (tests) must not stack handlers.
    if any(getattr(handler, "_catalog_handler", False) for handler in logger.handlers):
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._catalog_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
