"""Mini README: Logging helpers shared by every bank_tracker module.

Structure:
    * configure_root_logger - attach a single formatted stream handler.
    * get_logger - module logger factory used as ``LOGGER = get_logger(__name__)``.

Usage:
    Ledger mutations log at INFO, persistence and hydration details at DEBUG,
    and recoverable failures (storage, customer lookups) at WARNING. The level
    may be given as an int or a level name such as ``"debug"`` so it can be
    driven from settings or the CLI.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger once; later calls only adjust the level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        root_logger.setLevel(_resolve_level(level))
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.setLevel(_resolve_level(level))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger, making sure a handler exists."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
