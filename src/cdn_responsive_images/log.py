"""Logging setup shared by the command line tools."""

import logging
from enum import Enum

LOG_FORMAT_DEBUG = (
    "%(asctime)s %(levelname)s:%(pathname)s:%(funcName)s:%(lineno)d: %(message)s"
)


class LogLevels(Enum):
    info = "INFO"
    warn = "WARN"
    error = "ERROR"
    debug = "DEBUG"


def configure_logging(log_level: LogLevels | str) -> None:
    """Configure the root logger. Unknown levels fall back to ERROR."""
    if isinstance(log_level, LogLevels):
        log_level = log_level.value
    log_level = str(log_level).upper()
    log_levels = {level.value.upper() for level in LogLevels}

    if log_level not in log_levels:
        logging.basicConfig(level=LogLevels.error.value, format=LOG_FORMAT_DEBUG)
        logging.getLogger(__name__).warning(
            "Invalid log level '%s'. Valid levels are: %s", log_level, sorted(log_levels)
        )
        return

    logging.basicConfig(level=log_level, format=LOG_FORMAT_DEBUG)
