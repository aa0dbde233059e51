"""
Logging utilities for the command helpers.
Uses Rich for colored console output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

CUSTOM_THEME = Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "blue",
    "logging.level.warning": "yellow",
    "logging.level.error": "red",
})

console = Console(theme=CUSTOM_THEME, stderr=True)

LOG_FORMAT = "[%(name)s] %(message)s"


def setup_logging(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with RichHandler.

    Calling it twice for the same name replaces the handler instead of
    stacking a second one.

    Args:
        name: Logger name
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)
    logger.handlers = []

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    logger.addHandler(handler)
    return logger


def get_logger(name: str, debug: bool = False) -> logging.Logger:
    """Get a logger instance, at DEBUG level when `debug` is set."""
    return setup_logging(name, logging.DEBUG if debug else None)
