"""Log level selection for the ``ccnotify`` logger hierarchy.

``CCNOTIFY_DEBUG`` (falling back to ``DEBUG``) accepts a name or a number:
none=0, error=1, warn=2, info=3, debug=4, verbose=5. Anything else means error.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None

_LEVELS: dict[str, int] = {
    "none": logging.CRITICAL + 10,
    "0": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "1": logging.ERROR,
    "warn": logging.WARNING,
    "2": logging.WARNING,
    "info": logging.INFO,
    "3": logging.INFO,
    "debug": logging.DEBUG,
    "4": logging.DEBUG,
    "verbose": logging.NOTSET + 1,
    "5": logging.NOTSET + 1,
}


_NAMES: dict[int, str] = {
    logging.CRITICAL + 10: "none",
    logging.ERROR: "error",
    logging.WARNING: "warn",
    logging.INFO: "info",
    logging.DEBUG: "debug",
    logging.NOTSET + 1: "verbose",
}


def level_name(level: int) -> str:
    return _NAMES.get(level, logging.getLevelName(level).lower())


def level_from_env(environ: dict[str, str] | None = None) -> int:
    environ = os.environ if environ is None else environ
    value = environ.get("CCNOTIFY_DEBUG") or environ.get("DEBUG")
    if not value:
        return logging.ERROR
    return _LEVELS.get(value.strip().lower(), logging.ERROR)


def configure_logging(verbose: bool = False) -> int:
    """Attach a stderr handler to the ``ccnotify`` logger and set its level.

    Safe to call more than once; the previous handler is replaced.
    Returns the effective level.
    """
    level = min(level_from_env(), logging.DEBUG) if verbose else level_from_env()

    global _handler
    logger = logging.getLogger("ccnotify")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)
    return level
