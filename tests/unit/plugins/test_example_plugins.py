"""End-to-end tests for the bundled plugins."""

from pathlib import Path
from unittest.mock import MagicMock

import hikari
import pytest

from dispatchbot.core.command_handler import CommandHandler
from dispatchbot.core.plugin_loader import PluginLoader
from dispatchbot.inhibitors import register_default_inhibitors

PLUGIN_DIR = Path(__file__).resolve().parents[3] / "plugins"


@pytest.fixture
def handler(registry):
    register_default_inhibitors(registry, alert_timeout=0)
    loader = PluginLoader(registry)
    loader.add_plugin_directory(str(PLUGIN_DIR))
    loader.load_all_plugins()
    registry.freeze()
    return CommandHandler(registry)


@pytest.fixture
def moderator():
    role = MagicMock(spec=hikari.Role)
    role.permissions = hikari.Permissions.KICK_MEMBERS | hikari.Permissions.MANAGE_GUILD
    member = MagicMock(spec=hikari.Member)
    member.id = 111111111
    member.get_roles = MagicMock(return_value=[role])
    return member


@pytest.fixture
def regular_member():
    member = MagicMock(spec=hikari.Member)
    member.id = 111111111
    member.get_roles = MagicMock(return_value=[])
    return member


def sent_contents(mock_bot):
    return [c.kwargs["content"] for c in mock_bot.hikari_bot.rest.create_message.call_args_list]


def test_all_plugins_load(handler):
    assert {"ping", "say", "kick", "config"} <= set(handler.registry.commands)
    assert handler.registry.get_command("settings").name == "config"
    assert handler.registry.command_aliases["config-show"] == "get"


class TestPing:
    @pytest.mark.asyncio
    async def test_ping(self, handler, make_message, mock_bot):
        assert await handler.handle_message(make_message("!pong")) is True

        assert sent_contents(mock_bot) == ["🏓 Pong!"]
        mock_bot.hikari_bot.rest.create_message.return_value.edit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_say(self, handler, make_message, mock_bot):
        await handler.handle_message(make_message("!say hello   there world"))

        assert sent_contents(mock_bot) == ["hello there world"]

    @pytest.mark.asyncio
    async def test_say_without_text(self, handler, make_message, mock_bot):
        await handler.handle_message(make_message("!say"))

        assert sent_contents(mock_bot) == ["<@111111111>, tell me what to say."]


class TestKick:
    @pytest.mark.asyncio
    async def test_kick_by_mention(self, handler, make_message, moderator, mock_member, mock_bot):
        await handler.handle_message(make_message("!kick <@!222222222> being rude", member=moderator))

        mock_member.kick.assert_awaited_once_with(reason="testuser: being rude")
        assert "was kicked" in sent_contents(mock_bot)[0]

    @pytest.mark.asyncio
    async def test_default_reason(self, handler, make_message, moderator, mock_member):
        await handler.handle_message(make_message("!kick spammer", member=moderator))

        mock_member.kick.assert_awaited_once_with(reason="testuser: No reason provided")

    @pytest.mark.asyncio
    async def test_without_permission(self, handler, make_message, regular_member, mock_member, mock_bot):
        await handler.handle_message(make_message("!kick spammer", member=regular_member))

        mock_member.kick.assert_not_awaited()
        assert sent_contents(mock_bot) == []

    @pytest.mark.asyncio
    async def test_unknown_member(self, handler, make_message, moderator, mock_bot):
        await handler.handle_message(make_message("!kick nobody", member=moderator))

        assert sent_contents(mock_bot) == ["<@111111111>, you need to tell me who to kick."]


class TestConfig:
    @pytest.mark.asyncio
    async def test_get_prefix(self, handler, make_message, mock_bot):
        await handler.handle_message(make_message("!config get prefix"))

        assert sent_contents(mock_bot) == ["<@111111111>, the prefix here is `!`"]

    @pytest.mark.asyncio
    async def test_alias_and_subcommand_alias(self, handler, make_message, mock_bot):
        await handler.handle_message(make_message("!settings SHOW prefix"))

        assert sent_contents(mock_bot) == ["<@111111111>, the prefix here is `!`"]

    @pytest.mark.asyncio
    async def test_no_subcommand_runs_parent(self, handler, make_message, mock_bot):
        await handler.handle_message(make_message("!config"))

        assert "config get <setting>" in sent_contents(mock_bot)[0]

    @pytest.mark.asyncio
    async def test_set_prefix(self, handler, make_message, moderator, mock_bot):
        await handler.handle_message(make_message("!config set prefix ?", member=moderator))

        assert handler.registry.resolve_prefix(123456789) == "?"
        assert sent_contents(mock_bot) == ["<@111111111>, the prefix is now `?`"]

        mock_bot.hikari_bot.rest.create_message.reset_mock()
        assert await handler.handle_message(make_message("!config get prefix")) is False
        assert await handler.handle_message(make_message("?config get prefix")) is True
        assert sent_contents(mock_bot) == ["<@111111111>, the prefix here is `?`"]

    @pytest.mark.asyncio
    async def test_set_prefix_without_permission(self, handler, make_message, regular_member, mock_bot):
        await handler.handle_message(make_message("!config set prefix ?", member=regular_member))

        assert handler.registry.resolve_prefix(123456789) == "!"
        assert sent_contents(mock_bot) == []
