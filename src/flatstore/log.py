"""
flatstore logging setup.

The library only creates module loggers; hosts that want console output call
``configure_logging`` once at startup.
"""

import logging
import sys

from flatstore.config import StoreSettings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: StoreSettings | None = None) -> logging.Logger:
    """Configure standard logging to stdout and return the package logger."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger = logging.getLogger("flatstore")
    logger.setLevel(level)
    return logger
