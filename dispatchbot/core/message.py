from __future__ import annotations

from typing import TYPE_CHECKING, Any

import hikari

if TYPE_CHECKING:
    from .bot import DispatchBot


class MessageContext:
    """What commands, resolvers and inhibitors see of an inbound message."""

    def __init__(self, event: hikari.MessageCreateEvent, bot: DispatchBot) -> None:
        self.event = event
        self.bot = bot

        self.message = event.message
        self.author = event.author
        self.content = event.content or ""
        self.guild_id: hikari.Snowflake | None = getattr(event, "guild_id", None)
        self.channel_id = event.channel_id
        self.member: hikari.Member | None = getattr(event, "member", None)

    @property
    def is_bot(self) -> bool:
        """True for other bots, webhooks and our own messages."""
        if self.author.is_bot or self.event.is_webhook:
            return True
        me = self.bot.hikari_bot.get_me()
        return me is not None and self.author.id == me.id

    @property
    def is_dm(self) -> bool:
        return self.guild_id is None

    def get_guild(self) -> hikari.GatewayGuild | None:
        if self.guild_id:
            return self.bot.hikari_bot.cache.get_guild(self.guild_id)
        return None

    def get_channel(self) -> hikari.PartialChannel | None:
        if self.guild_id:
            return self.bot.hikari_bot.cache.get_guild_channel(self.channel_id)
        return None

    async def respond(self, content: hikari.UndefinedOr[Any] = hikari.UNDEFINED, *, embed=hikari.UNDEFINED, components=hikari.UNDEFINED) -> hikari.Message:
        return await self.bot.hikari_bot.rest.create_message(
            self.channel_id,
            content=content,
            embed=embed,
            components=components
        )
