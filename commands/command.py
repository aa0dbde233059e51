"""
Command
A single bot command: identity, access flags and handler, plus the
static helpers a dispatcher calls for each incoming message
"""

import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

from bot.config import Config, config as default_config
from utils.discord import DiscordUtils, Reply, ReplyValue
from utils.logger import get_logger
from utils.validation import ValidationUtils

logger = get_logger("Command", debug=default_config.DEBUG)

# Command handler type alias
CommandRun = Callable[[Any, List[str]], Union[ReplyValue, Awaitable[ReplyValue]]]

# Reply key returned by commands that have no handler yet
INCOMPLETE_REPLY = "command.incomplete"

DEV_ONLY_MESSAGE = "This command is for developers only."
NO_PERMISSION_MESSAGE = "I don't think you have permission to do this."
GUILD_ONLY_MESSAGE = "This command can only be used in a server."
MISSING_BOT_PERMISSIONS_MESSAGE = (
    "I think I'm missing some permissions. "
    "Please make sure I have the following permissions in this server:"
)

WHITESPACE = re.compile(r"\s+")


def default_run(message: Any, args: List[str]) -> ReplyValue:
    """Placeholder handler."""
    return INCOMPLETE_REPLY


class CommandArgs(NamedTuple):
    """Parsed invocation: lower-cased command word and its arguments."""

    args: List[str]
    command: str


def _permission_tuple(tokens: Optional[Iterable[str]], label: str) -> Tuple[str, ...]:
    result = ValidationUtils.validate_permissions(tokens)
    if not result:
        raise ValueError(f"{label}: {result.error}")
    return result.value


@dataclass(frozen=True)
class Command:
    """
    Represents one invocable bot command.

    Attributes:
        name: Name of the command, always the first trigger
        triggers: Extra words that trigger the command, stored after the name
        dev_only: Whether only developers may run it
        permissions: Permission tokens the invoking member needs
        bot_permissions: Permission tokens the bot needs in the guild
        run: Handler called with (message, args)

    Raises:
        ValueError: If a permission token is unknown
    """

    name: str
    triggers: Tuple[str, ...] = ()
    dev_only: bool = False
    permissions: Tuple[str, ...] = ()
    bot_permissions: Tuple[str, ...] = ()
    run: Optional[CommandRun] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.triggers is None:
            triggers: Tuple[str, ...] = (self.name,)
        elif isinstance(self.triggers, str):
            triggers = (self.name, self.triggers)
        else:
            triggers = (self.name, *self.triggers)

        object.__setattr__(self, "triggers", triggers)
        object.__setattr__(self, "dev_only", bool(self.dev_only))
        object.__setattr__(self, "permissions", _permission_tuple(self.permissions, "permissions"))
        object.__setattr__(self, "bot_permissions", _permission_tuple(self.bot_permissions, "bot_permissions"))
        object.__setattr__(self, "run", self.run or default_run)

        logger.debug(f"Created command: {self.name} (triggers: {', '.join(self.triggers)})")

    @classmethod
    def from_config(cls, config: Mapping[str, Any], run: Optional[CommandRun] = None) -> "Command":
        """
        Build a command from a configuration dict.

        Args:
            config: Command configuration dict with keys:
                - name: Command name (required)
                - triggers: List of extra trigger words
                - dev_only / devOnly: Developer-only flag
                - permissions: Permission tokens the member needs
                - bot_permissions / botPermissions: Permission tokens the bot needs
            run: Handler for the command

        Returns:
            The command
        """
        return cls(
            name=config["name"],
            triggers=config.get("triggers"),
            dev_only=config.get("dev_only", config.get("devOnly", False)),
            permissions=config.get("permissions"),
            bot_permissions=config.get("bot_permissions", config.get("botPermissions")),
            run=run,
        )

    def matches(self, word: str) -> bool:
        """Check if a parsed command word is one of this command's triggers."""
        normalized = word.lower()
        return any(trigger.lower() == normalized for trigger in self.triggers)

    async def invoke(self, message: Any, args: List[str]) -> List[Reply]:
        """
        Run the handler and collect its replies.

        Args:
            message: Discord message that invoked the command
            args: Parsed arguments

        Returns:
            Replies produced by the handler, flattened to a list
        """
        logger.debug(f"Running {self.name} with args: {args}")
        try:
            result = self.run(message, args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(f"[{self.name}] {e}")
            raise

        return DiscordUtils.normalize_replies(result)

    @staticmethod
    def get_args(message: Any, used_prefix: Optional[str], config: Optional[Config] = None) -> CommandArgs:
        """
        Split a message into the command word and its arguments.

        The prefix is stripped by length: the used prefix, else the
        configured fallback prefix, else a single character.

        Args:
            message: The used message
            used_prefix: The prefix the message was sent with
            config: Configuration holding the fallback prefix

        Returns:
            CommandArgs with the arguments and the lower-cased command
        """
        fallback = config.PREFIX if config is not None else ""
        prefix_length = len(used_prefix or "") or len(fallback or "") or 1

        args = WHITESPACE.split(message.content[prefix_length:].strip())
        command = args.pop(0).lower()
        return CommandArgs(args=args, command=command)

    @staticmethod
    def is_using_prefix(message: Any, used_prefix: Optional[str], is_mentioning_bot: bool = False) -> bool:
        """
        Returns True if the prefix was used or the bot was mentioned.

        Args:
            message: The used message
            used_prefix: The configured prefix
            is_mentioning_bot: If the author mentioned the bot
        """
        if is_mentioning_bot:
            return True
        content = message.content.strip().lower()
        return content.startswith((used_prefix or "").strip().lower())

    @staticmethod
    def is_allowed(message: Any, command: "Command", config: Optional[Config] = None) -> Union[bool, str]:
        """
        Check whether the message author may run a command.

        Developers may run everything. Otherwise developer-only commands
        are refused, then the member's permissions are checked, then the
        bot's own permissions in the guild.

        Args:
            message: The used message
            command: The used command
            config: Configuration holding the developer list

        Returns:
            True if allowed, otherwise the message to show the user
        """
        member = message.author

        if config is not None and config.is_developer(member.id):
            return True

        if command.dev_only:
            logger.info(f"Denied {command.name} for {member.id}: developers only")
            return DEV_ONLY_MESSAGE

        guild = message.guild
        if guild is None and (command.permissions or command.bot_permissions):
            return GUILD_ONLY_MESSAGE

        if command.permissions and DiscordUtils.missing_permissions(member, command.permissions):
            logger.info(f"Denied {command.name} for {member.id}: missing permissions")
            return NO_PERMISSION_MESSAGE

        if command.bot_permissions:
            missing = DiscordUtils.missing_permissions(guild.me, command.bot_permissions)
            if missing:
                logger.info(f"Cannot run {command.name}: bot is missing {', '.join(missing)}")
                return "\n".join([MISSING_BOT_PERMISSIONS_MESSAGE, *missing])

        return True
