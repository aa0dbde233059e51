"""
Configuration management for the command helpers.
Loads environment variables and provides configuration settings.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from utils.validation import ValidationUtils

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEVELOPER_SEPARATOR = re.compile(r"[,\s]+")


def parse_developers(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma or whitespace separated ID list."""
    if not raw:
        return ()
    return tuple(part for part in DEVELOPER_SEPARATOR.split(raw.strip()) if part)


@dataclass(frozen=True)
class Config:
    """Command configuration settings."""

    # Fallback prefix when a command is parsed without one
    PREFIX: str = ""

    # Privileged operators, allowed to run every command
    DEVELOPERS: Tuple[str, ...] = ()

    # Debug
    DEBUG: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            PREFIX=os.getenv("PREFIX", ""),
            DEVELOPERS=parse_developers(os.getenv("DEVELOPERS")),
            DEBUG=os.getenv("DEBUG", "false").lower() == "true",
        )

    def validate(self) -> None:
        """Validate configuration."""
        for developer_id in self.DEVELOPERS:
            if not ValidationUtils.is_valid_snowflake(developer_id):
                raise ValueError(f"Invalid developer ID in DEVELOPERS: {developer_id!r}")

    def is_developer(self, user_id: object) -> bool:
        """Check if a user ID is in the developer list."""
        return str(user_id) in self.DEVELOPERS


# Global config instance
config = Config.from_env()
