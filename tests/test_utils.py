"""
Tests for config loading, validation and Discord helpers.
"""

import asyncio
import logging

import discord
import pytest

from bot.config import Config, parse_developers
from tests.mocks import MockChannel, MockGuild, MockMember, MockUser
from utils.discord import DiscordUtils
from utils.logger import get_logger, setup_logging
from utils.validation import ValidationUtils


# Config

def test_config_from_env(monkeypatch):
    monkeypatch.setenv("PREFIX", "!")
    monkeypatch.setenv("DEVELOPERS", "123456789012345678, 876543210987654321")
    monkeypatch.setenv("DEBUG", "TRUE")

    config = Config.from_env()
    assert config.PREFIX == "!"
    assert config.DEVELOPERS == ("123456789012345678", "876543210987654321")
    assert config.DEBUG is True
    assert config.is_developer(123456789012345678)
    assert not config.is_developer(12345678901234567)
    config.validate()


def test_config_defaults(monkeypatch):
    monkeypatch.delenv("PREFIX", raising=False)
    monkeypatch.delenv("DEVELOPERS", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    config = Config.from_env()
    assert config.PREFIX == ""
    assert config.DEVELOPERS == ()
    assert config.DEBUG is False


def test_config_validate_rejects_bad_developer():
    with pytest.raises(ValueError, match="not-an-id"):
        Config(DEVELOPERS=("123456789012345678", "not-an-id")).validate()


def test_parse_developers():
    assert parse_developers(None) == ()
    assert parse_developers("") == ()
    assert parse_developers(" 1,2  3\n4 ") == ("1", "2", "3", "4")


# Validation

def test_snowflake_validation():
    assert ValidationUtils.is_valid_snowflake("123456789012345678") is True
    assert ValidationUtils.is_valid_snowflake(123456789012345678) is True
    assert ValidationUtils.is_valid_snowflake("not_a_number") is False
    assert ValidationUtils.is_valid_snowflake(True) is False


def test_permission_validation():
    assert ValidationUtils.is_valid_permission("BAN_MEMBERS")
    assert ValidationUtils.is_valid_permission("manage_messages")
    assert not ValidationUtils.is_valid_permission("FLY")
    assert not ValidationUtils.is_valid_permission(None)

    result = ValidationUtils.validate_permissions(["kick_members", "KICK_MEMBERS", "BAN_MEMBERS"])
    assert result.valid
    assert result.value == ("KICK_MEMBERS", "BAN_MEMBERS")

    result = ValidationUtils.validate_permissions(["BAN_MEMBERS", "FLY"])
    assert not result
    assert "FLY" in result.error

    assert ValidationUtils.validate_permissions(None).value == ()


# Discord helpers

def test_has_permission():
    guild = MockGuild(owner_id=1)
    member = MockMember(2, guild, ban_members=True)
    assert DiscordUtils.has_permission(member, "BAN_MEMBERS")
    assert not DiscordUtils.has_permission(member, "KICK_MEMBERS")

    admin = MockMember(3, guild, administrator=True)
    assert DiscordUtils.has_permission(admin, "KICK_MEMBERS")

    owner = MockMember(1, guild)
    assert DiscordUtils.has_permission(owner, "KICK_MEMBERS")


def test_missing_permissions_keeps_order():
    member = MockMember(2, MockGuild(), kick_members=True)
    missing = DiscordUtils.missing_permissions(member, ["MANAGE_ROLES", "KICK_MEMBERS", "BAN_MEMBERS"])
    assert missing == ["MANAGE_ROLES", "BAN_MEMBERS"]


def test_normalize_replies():
    embed = discord.Embed(title="x")
    assert DiscordUtils.normalize_replies(None) == []
    assert DiscordUtils.normalize_replies("hi") == ["hi"]
    assert DiscordUtils.normalize_replies({"content": "hi"}) == [{"content": "hi"}]
    assert DiscordUtils.normalize_replies(("a", None, embed)) == ["a", embed]

    with pytest.raises(TypeError):
        DiscordUtils.normalize_replies(["a", ["nested"]])


def test_send_replies():
    channel = MockChannel()
    embed = discord.Embed(title="x")

    sent = asyncio.run(DiscordUtils.send_replies(channel, ["text", embed, {"content": "c", "tts": True}]))

    assert len(sent) == 3
    assert channel.sent[0] == {"content": "text"}
    assert channel.sent[1] == {"content": None, "embed": embed}
    assert channel.sent[2] == {"content": "c", "tts": True}


def test_safe_send_suppresses_errors():
    class BrokenChannel:
        async def send(self, *args, **kwargs):
            raise RuntimeError("forbidden")

    assert asyncio.run(DiscordUtils.safe_send(BrokenChannel(), "hi")) is None
    assert asyncio.run(DiscordUtils.safe_send(None, "hi")) is None


# Logger

def test_logger():
    logger = setup_logging("Test", level=logging.WARNING)
    assert logger.name == "Test"
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1

    setup_logging("Test")
    assert len(logging.getLogger("Test").handlers) == 1

    assert get_logger("TestDebug", debug=True).level == logging.DEBUG
    assert get_logger("TestInfo").level == logging.INFO


def test_permission_aliases():
    assert ValidationUtils.normalize_permission("use_vad") == "USE_VOICE_ACTIVATION"
    assert ValidationUtils.is_valid_permission("USE_VAD")
    assert ValidationUtils.normalize_permission("FLY") is None
    assert ValidationUtils.validate_permissions(["USE_VAD", "USE_VOICE_ACTIVATION"]).value == ("USE_VOICE_ACTIVATION",)

    member = MockMember(2, MockGuild(), use_voice_activation=True)
    assert DiscordUtils.has_permission(member, "USE_VAD")


def test_has_permission_without_guild_permissions():
    assert not DiscordUtils.has_permission(MockUser(2), "SEND_MESSAGES")
    assert DiscordUtils.missing_permissions(MockUser(2), ["BAN_MEMBERS"]) == ["BAN_MEMBERS"]
