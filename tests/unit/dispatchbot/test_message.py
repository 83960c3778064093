"""Tests for the message context."""

import hikari
import pytest


class TestMessageContext:
    def test_attributes(self, make_message, mock_user):
        message = make_message("!ping")

        assert message.content == "!ping"
        assert message.author is mock_user
        assert message.guild_id == 123456789
        assert message.channel_id == 444444444

    def test_empty_content(self, make_message):
        assert make_message(None).content == ""

    def test_regular_user_is_not_bot(self, mock_message):
        assert mock_message.is_bot is False

    def test_bot_author(self, make_message, mock_user):
        mock_user.is_bot = True

        assert make_message().is_bot is True

    def test_webhook(self, make_message):
        message = make_message()
        message.event.is_webhook = True

        assert message.is_bot is True

    def test_own_message(self, make_message, mock_user, mock_bot):
        mock_user.id = mock_bot.hikari_bot.get_me().id

        assert make_message().is_bot is True

    def test_dm(self, make_message, mock_bot):
        message = make_message(guild_id=None)

        assert message.is_dm is True
        assert message.get_guild() is None
        assert message.get_channel() is None
        mock_bot.hikari_bot.cache.get_guild.assert_not_called()

    def test_guild_lookups(self, mock_message, mock_guild, mock_text_channel, mock_bot):
        assert mock_message.is_dm is False
        assert mock_message.get_guild() is mock_guild
        assert mock_message.get_channel() is mock_text_channel
        mock_bot.hikari_bot.cache.get_guild.assert_called_once_with(123456789)

    @pytest.mark.asyncio
    async def test_respond(self, mock_message, mock_bot):
        sent = await mock_message.respond("pong")

        assert sent is mock_bot.hikari_bot.rest.create_message.return_value
        mock_bot.hikari_bot.rest.create_message.assert_awaited_once_with(
            444444444, content="pong", embed=hikari.UNDEFINED, components=hikari.UNDEFINED
        )
