"""
Utility modules for the command helpers.
"""

from .logger import get_logger, setup_logging
from .discord import DiscordUtils, Reply, ReplyValue
from .validation import ValidationUtils, ValidationResult

__all__ = [
    "get_logger",
    "setup_logging",
    "DiscordUtils",
    "Reply",
    "ReplyValue",
    "ValidationUtils",
    "ValidationResult",
]
