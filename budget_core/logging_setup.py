"""Logging configuration for the ``budget_core`` package and its surfaces.

Library modules only call ``logging.getLogger(__name__)``; entry points call
``configure_logging`` once at start-up.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

from .config import get_log_level

_PKG_LOGGER_NAMES = ("budget_core", "budget_tracker", "budget_api")
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

for _name in _PKG_LOGGER_NAMES:
    logging.getLogger(_name).addHandler(logging.NullHandler())


def _parse_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = get_log_level()
    level = level.strip().upper()
    if level.isdigit():
        return int(level)
    numeric = getattr(logging, level, None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def configure_logging(
    level: Union[int, str, None] = None,
    *,
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Attach a single stream handler to each package logger.

    Calling it again replaces the handler, so the level can be changed.
    """
    numeric = _parse_level(level)
    formatter = logging.Formatter(fmt or _DEFAULT_FORMAT)
    for name in _PKG_LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(numeric)
        logger.propagate = False
