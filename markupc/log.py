"""Logging helpers for markupc.

The library only logs at DEBUG; callers opt in with `setup_logging`.
"""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "setup_logging"]

ROOT_LOGGER_NAME = "markupc"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(level: int = logging.INFO, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level.
        stream: Output stream.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or ROOT_LOGGER_NAME)
