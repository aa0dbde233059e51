"""
Validation Utilities
Helper functions for validating Discord IDs and permission tokens
"""

import re
from typing import Any, Iterable, Optional, Tuple, Union

import discord

# Discord snowflake ID pattern: 17-20 digits
SNOWFLAKE_REGEX = re.compile(r"^[0-9]{17,20}$")

# Upper-case permission tokens, e.g. "BAN_MEMBERS"
PERMISSION_TOKENS = frozenset(flag.upper() for flag in discord.Permissions.VALID_FLAGS)

# Platform token names that differ from the discord flag names
PERMISSION_ALIASES = {
    "USE_VAD": "USE_VOICE_ACTIVATION",
    "USE_EXTERNAL_EMOJIS": "EXTERNAL_EMOJIS",
    "USE_EXTERNAL_STICKERS": "EXTERNAL_STICKERS",
}


class ValidationResult:
    """Result of a validation operation."""

    def __init__(
        self,
        valid: bool,
        error: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        self.valid = valid
        self.error = error
        self.value = value

    def __bool__(self) -> bool:
        return self.valid


class ValidationUtils:
    """Utility class for input validation."""

    @staticmethod
    def is_valid_snowflake(id_value: Union[str, int]) -> bool:
        """
        Check if value is a valid Discord snowflake ID.

        Args:
            id_value: ID to validate

        Returns:
            True if valid snowflake
        """
        if not isinstance(id_value, (str, int)) or isinstance(id_value, bool):
            return False
        return bool(SNOWFLAKE_REGEX.match(str(id_value)))

    @staticmethod
    def normalize_permission(token: Any) -> Optional[str]:
        """
        Map a permission token to its upper-case discord flag name.

        Args:
            token: Permission token, e.g. "ban_members" or "USE_VAD"

        Returns:
            The flag name, or None if the token names no permission
        """
        if not isinstance(token, str):
            return None
        upper = token.strip().upper()
        upper = PERMISSION_ALIASES.get(upper, upper)
        return upper if upper in PERMISSION_TOKENS else None

    @staticmethod
    def is_valid_permission(token: Any) -> bool:
        """Check if token names a Discord permission flag (case-insensitive)."""
        return ValidationUtils.normalize_permission(token) is not None

    @staticmethod
    def validate_permissions(tokens: Optional[Iterable[str]]) -> ValidationResult:
        """
        Validate and normalize a collection of permission tokens.

        Tokens are mapped to flag names and de-duplicated keeping their
        first position.

        Args:
            tokens: Permission tokens, or None

        Returns:
            ValidationResult with the normalized tuple as value, or the
            first unknown token in the error
        """
        if not tokens:
            return ValidationResult(valid=True, value=())

        if isinstance(tokens, str):
            tokens = [tokens]

        normalized: Tuple[str, ...] = ()
        for token in tokens:
            flag = ValidationUtils.normalize_permission(token)
            if flag is None:
                return ValidationResult(valid=False, error=f"Unknown permission: {token!r}")
            if flag not in normalized:
                normalized += (flag,)

        return ValidationResult(valid=True, value=normalized)
