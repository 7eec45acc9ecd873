# === FILE: tech_scout/logger.py ===
"""Logging for **TechScout**.

The driver writes its ``log`` events to the ``TechScout`` logger when the
``debug`` option is on; the CLI calls :func:`configure` once at start-up::

    from tech_scout.logger import logger
    logger.info("Analysis started")
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "TechScout"

#: driver log levels (``"warn"`` as the engine spells it) -> logging levels
LEVELS: Final[dict[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _handlers(log_file: str | Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    return handlers


def configure(
    *,
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the project logger.

    Output always goes to stdout; *log_file* adds a rotating file.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    lg.handlers.clear()
    formatter = logging.Formatter(log_format)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def to_level(name: str | None) -> int:
    """Map a driver level name to a :mod:`logging` level, DEBUG when unknown."""
    return LEVELS.get((name or "debug").lower(), logging.DEBUG)


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "to_level", "LEVELS"]
