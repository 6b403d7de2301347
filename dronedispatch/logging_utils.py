"""Mini README: Application-wide logging helpers for the dispatch engine.

Structure:
    * LOG_FORMAT - line layout shared by the CLI and the HTTP service.
    * resolve_level - turn level names or numbers into ``logging`` levels.
    * configure_root_logger - install the shared stream handler once and
      retune the root level on later explicit calls.
    * get_logger - factory returning module loggers with the baseline set up.

Usage:
    Every module keeps ``LOGGER = get_logger(__name__)``. Request level
    events log at INFO, per-leg and search progress at DEBUG, skipped drones
    at WARNING and failed allocations at ERROR. The initial level comes from
    ``DRONEDISPATCH_LOG_LEVEL``; the CLI ``--log-level`` option overrides it
    for one run without stacking a second handler.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .configuration import get_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: Optional[logging.Handler] = None


def resolve_level(level: Union[int, str, None]) -> int:
    """Return the numeric level for ``level``; ``None`` means the configured one.

    Raises:
        ValueError: ``level`` is not a known level name.
    """

    if level is None:
        level = get_settings().log_level
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_root_logger(level: Union[int, str, None] = None) -> None:
    """Install the dispatch stream handler, or retune the root level afterwards."""

    global _handler
    root_logger = logging.getLogger()
    if _handler is not None:
        if level is not None:
            root_logger.setLevel(resolve_level(level))
        return

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.setLevel(resolve_level(level))
    root_logger.addHandler(_handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
