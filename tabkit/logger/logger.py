"""
tabkit.logger.logger

Small logging facade writing to stderr. Every message is prefixed with the
calling module path and function, so pipeline logs show which step ran.

The level comes from the LOG_LEVEL environment variable unless a caller
passes one to `configure`.
"""

import inspect
import logging
import os
from enum import IntEnum
from pathlib import Path

LOGGER_NAME = "tabkit"


class LOG_LEVEL(IntEnum):
    NOTSET = 0
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    CRITICAL = 50


_level_override: LOG_LEVEL | int | None = None


def get_log_level_from_env(default: LOG_LEVEL = LOG_LEVEL.INFO) -> LOG_LEVEL:
    """
    Read log level from environment variable LOG_LEVEL.
    Supports names (DEBUG, INFO, etc.) or integers.
    Prints a warning if an invalid value is provided.
    """
    raw = os.getenv("LOG_LEVEL")
    if raw is None:
        return default

    raw = raw.strip()

    if raw.isdigit():
        try:
            return LOG_LEVEL(int(raw))
        except ValueError:
            print(f"[WARN] Unknown numeric log level: {raw}. Falling back to default: {default.name}")
            return default

    try:
        return LOG_LEVEL[raw.upper()]
    except KeyError:
        print(f"[WARN] Unknown log level: {raw}. Falling back to default: {default.name}")
        return default


def configure(level: LOG_LEVEL | int | None = None) -> None:
    """Pin the log level for the process; None goes back to LOG_LEVEL env lookup."""
    global _level_override
    _level_override = level


def _get_caller_path(levels: int = 3) -> str:
    frame = inspect.stack()[3]
    filepath = Path(frame.filename)
    short_path = "/".join(filepath.parts[-levels:])
    return f"{short_path}:{frame.function}"


def _setup_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    level = _level_override if _level_override is not None else get_log_level_from_env()
    logger.setLevel(level)
    return logger


def _log(level: LOG_LEVEL, message: str | None = None):
    logger = _setup_logger()
    if not logger.isEnabledFor(level):
        return
    msg = f" - {message}" if message else ""
    logger.log(level, f"{_get_caller_path()}{msg}")


# Public logging API.
def log_debug(msg: str | None = None):
    _log(LOG_LEVEL.DEBUG, msg)


def log_info(msg: str | None = None):
    _log(LOG_LEVEL.INFO, msg)


def log_warn(msg: str | None = None):
    _log(LOG_LEVEL.WARN, msg)


log_warning = log_warn


def log_error(msg: str | None = None):
    _log(LOG_LEVEL.ERROR, msg)
