"""
Bot configuration.
"""

from .config import Config, config, parse_developers

__all__ = ["Config", "config", "parse_developers"]
