"""
Discord Utilities
Helper functions for permission queries and sending command replies
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import discord

from utils.logger import get_logger
from utils.validation import ValidationUtils

logger = get_logger("DiscordUtils")

# A single reply a command can produce
Reply = Union[str, Dict[str, Any], discord.Embed]

# What a command handler returns: one reply or a sequence of them
ReplyValue = Union[Reply, Sequence[Reply]]

REPLY_TYPES = (str, dict, discord.Embed)


class DiscordUtils:
    """Utility class for Discord-related helper functions."""

    @staticmethod
    def has_permission(member: Any, token: str) -> bool:
        """
        Check if a guild member holds a permission.

        Guild owners and administrators hold every permission. Authors
        without guild permissions (webhooks, plain users) hold none.

        Args:
            member: Discord member
            token: Permission token, e.g. "BAN_MEMBERS"

        Returns:
            True if the member holds the permission
        """
        permissions = getattr(member, "guild_permissions", None)
        if permissions is None:
            return False

        guild = getattr(member, "guild", None)
        if guild is not None and getattr(guild, "owner_id", None) == member.id:
            return True

        if permissions.administrator:
            return True

        flag = ValidationUtils.normalize_permission(token)
        return flag is not None and bool(getattr(permissions, flag.lower(), False))

    @staticmethod
    def missing_permissions(member: Any, tokens: Iterable[str]) -> List[str]:
        """
        List the permission tokens a member lacks, in the given order.

        Args:
            member: Discord member
            tokens: Permission tokens to check

        Returns:
            Missing tokens (empty if the member holds all of them)
        """
        return [token for token in tokens if not DiscordUtils.has_permission(member, token)]

    @staticmethod
    def normalize_replies(value: Optional[ReplyValue]) -> List[Reply]:
        """
        Flatten a handler result into a list of replies.

        Args:
            value: A reply, a sequence of replies, or None

        Returns:
            List of replies (None entries dropped)

        Raises:
            TypeError: If a value is not a string, dict or embed
        """
        if value is None:
            return []

        if isinstance(value, REPLY_TYPES):
            return [value]

        if not isinstance(value, (list, tuple)):
            raise TypeError(f"Unsupported reply type: {type(value).__name__}")

        replies: List[Reply] = []
        for item in value:
            if item is None:
                continue
            if not isinstance(item, REPLY_TYPES):
                raise TypeError(f"Unsupported reply type: {type(item).__name__}")
            replies.append(item)
        return replies

    @staticmethod
    async def safe_send(channel: Any, reply: Reply) -> Optional[Any]:
        """
        Safely send a reply to a channel (suppress errors).

        Strings go out as content, embeds as `embed=` and dicts as send
        keyword arguments.

        Args:
            channel: Discord channel
            reply: Reply to send

        Returns:
            Sent message or None if failed
        """
        if not channel or not hasattr(channel, "send"):
            return None
        try:
            if isinstance(reply, discord.Embed):
                return await channel.send(embed=reply)
            if isinstance(reply, dict):
                return await channel.send(**reply)
            return await channel.send(reply)
        except Exception as e:
            logger.debug(f"Failed to send reply: {e}")
            return None

    @staticmethod
    async def send_replies(channel: Any, replies: Iterable[Reply]) -> List[Any]:
        """
        Send replies in order.

        Args:
            channel: Discord channel
            replies: Replies to send

        Returns:
            Messages that were sent successfully
        """
        sent = []
        for reply in replies:
            message = await DiscordUtils.safe_send(channel, reply)
            if message is not None:
                sent.append(message)
        return sent
