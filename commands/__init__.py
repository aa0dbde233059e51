"""
Command record and helpers for the Discord bot.
"""

from .command import Command, CommandArgs, CommandRun, default_run

__all__ = [
    "Command",
    "CommandArgs",
    "CommandRun",
    "default_run",
]
