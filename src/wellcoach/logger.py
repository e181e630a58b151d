"""Logging helpers.

`get_logger` hands out stdlib loggers that share one stream handler and
formatter, so every module logs in the same shape.
"""

from __future__ import annotations

import logging
from typing import Optional

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

ROOT_LOGGER_NAME = "wellcoach"


def get_logger(name: str = ROOT_LOGGER_NAME, level: Optional[int] = None) -> logging.Logger:
    """Return a logger under the wellcoach hierarchy.

    Only the package root logger gets the stream handler; child loggers
    propagate to it. Calling this repeatedly never adds duplicate handlers.

    Args:
        name: Logger name, usually ``__name__`` of the calling module
        level: Optional level to set on the returned logger

    Returns:
        Configured logging.Logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _stream_handler not in root.handlers:
        root.addHandler(_stream_handler)
        if root.level == logging.NOTSET:
            root.setLevel(logging.INFO)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def configure_logging(level: str | int) -> None:
    """Set the level of the package root logger.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level '{level}'")
        level = numeric
    get_logger().setLevel(level)
