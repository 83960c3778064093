"""Pytest configuration and shared fixtures."""

import logging
import os
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time and the token is required
os.environ.setdefault("DISCORD_TOKEN", "test-token")

import hikari
import pytest

from dispatchbot.commands.arguments import register_default_resolvers
from dispatchbot.core.message import MessageContext
from dispatchbot.core.registry import BotRegistry

# Disable logging during tests
logging.disable(logging.CRITICAL)


@pytest.fixture
def registry():
    """Registry with the built-in argument resolvers."""
    registry = BotRegistry(default_prefix="!")
    register_default_resolvers(registry)
    return registry


@pytest.fixture
def mock_user():
    """Mock Discord user."""
    user = MagicMock(spec=hikari.User)
    user.id = 111111111
    user.username = "testuser"
    user.display_name = "Test User"
    user.is_bot = False
    user.mention = "<@111111111>"
    return user


@pytest.fixture
def mock_member(mock_user):
    """Mock Discord member."""
    member = MagicMock(spec=hikari.Member)
    member.id = 222222222
    member.username = "spammer"
    member.display_name = "Spam King"
    member.is_bot = False
    member.get_roles = MagicMock(return_value=[])
    member.kick = AsyncMock()
    return member


@pytest.fixture
def mock_text_channel():
    """Mock guild text channel."""
    channel = MagicMock(spec=hikari.GuildTextChannel)
    channel.id = 444444444
    channel.name = "general"
    channel.type = hikari.ChannelType.GUILD_TEXT
    channel.is_nsfw = False
    return channel


@pytest.fixture
def mock_voice_channel():
    """Mock guild voice channel."""
    channel = MagicMock(spec=hikari.GuildVoiceChannel)
    channel.id = 555555555
    channel.name = "voice"
    channel.type = hikari.ChannelType.GUILD_VOICE
    return channel


@pytest.fixture
def mock_role():
    """Mock guild role."""
    role = MagicMock(spec=hikari.Role)
    role.id = 666666666
    role.name = "Moderators"
    role.permissions = hikari.Permissions.KICK_MEMBERS
    return role


@pytest.fixture
def mock_guild(mock_member, mock_text_channel, mock_voice_channel, mock_role):
    """Mock cached guild with one member, two channels and one role."""
    guild = MagicMock(spec=hikari.GatewayGuild)
    guild.id = 123456789
    guild.name = "Test Guild"
    guild.owner_id = 987654321

    members = {mock_member.id: mock_member}
    channels = {mock_text_channel.id: mock_text_channel, mock_voice_channel.id: mock_voice_channel}
    roles = {mock_role.id: mock_role}

    guild.get_member = MagicMock(side_effect=members.get)
    guild.get_members = MagicMock(return_value=members)
    guild.get_channel = MagicMock(side_effect=channels.get)
    guild.get_channels = MagicMock(return_value=channels)
    guild.get_role = MagicMock(side_effect=roles.get)
    guild.get_roles = MagicMock(return_value=roles)
    return guild


@pytest.fixture
def mock_bot(registry, mock_guild, mock_text_channel):
    """Mock bot exposing what MessageContext and commands use."""
    bot = MagicMock()
    bot.registry = registry
    bot.hikari_bot = MagicMock(spec=hikari.GatewayBot)
    bot.hikari_bot.get_me = MagicMock(return_value=MagicMock(id=12345, username="TestBot"))
    bot.hikari_bot.cache = MagicMock()
    bot.hikari_bot.cache.get_guild = MagicMock(return_value=mock_guild)
    bot.hikari_bot.cache.get_guild_channel = MagicMock(return_value=mock_text_channel)
    bot.hikari_bot.rest = MagicMock()

    sent_message = MagicMock(spec=hikari.Message)
    sent_message.id = 999
    sent_message.edit = AsyncMock()
    sent_message.delete = AsyncMock()
    bot.hikari_bot.rest.create_message = AsyncMock(return_value=sent_message)
    return bot


@pytest.fixture
def make_event(mock_user, mock_guild, mock_text_channel):
    """Factory for guild message create events."""

    def factory(content="!test command", *, author=None, member=None, guild_id=mock_guild.id):
        event = MagicMock(spec=hikari.GuildMessageCreateEvent)
        event.author = author or mock_user
        event.member = member
        event.guild_id = guild_id
        event.channel_id = mock_text_channel.id
        event.content = content
        event.is_webhook = False
        event.message = MagicMock()
        return event

    return factory


@pytest.fixture
def make_message(make_event, mock_bot):
    """Factory for MessageContext objects around a mock event."""

    def factory(content="!test command", **kwargs):
        return MessageContext(make_event(content, **kwargs), mock_bot)

    return factory


@pytest.fixture
def mock_message(make_message):
    return make_message()
