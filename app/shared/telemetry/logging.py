"""Logging configuration for the fragments service."""

import logging
import sys

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that are too chatty below WARNING. uvicorn.access is replaced by
# the access line RequestIDMiddleware writes.
_QUIET_LOGGERS = ("MARKDOWN", "uvicorn.access")


def setup_logging(level: int | None = None) -> None:
    """Send all logging to stdout at INFO (DEBUG when settings.debug is set).

    Replaces any existing root handlers, so calling it twice is harmless.
    """
    if level is None:
        level = logging.DEBUG if get_settings().debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
