"""Argument resolvers using strategy pattern.

Every resolver looks at the remaining tokens of a message and either returns
a value for the argument or ``hikari.UNDEFINED`` when nothing matched. A
match consumes one token, unless the resolver sets ``consumes_rest``, in
which case the value is built from every remaining token and parsing stops.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import hikari

from ..core.utils import string_to_milliseconds
from .types import Argument

if TYPE_CHECKING:
    from ..core.message import MessageContext
    from ..core.registry import BotRegistry

logger = logging.getLogger(__name__)

TRUTHY_WORDS = frozenset({"true", "yes", "on", "enable", "1"})
FALSY_WORDS = frozenset({"false", "no", "off", "disable", "0"})


class ArgumentResolver(ABC):
    """Base class for argument resolvers."""

    name: str
    consumes_rest: bool = False

    @abstractmethod
    async def execute(
        self, argument: Argument, parameters: list[str], message: MessageContext
    ) -> hikari.UndefinedOr[Any]:
        """Resolve the next value for ``argument`` from ``parameters``."""


def _strip_mention(token: str, opening: str) -> str:
    if token.startswith(opening) and token.endswith(">"):
        return token[len(opening):-1]
    return token


def _snowflake(token: str) -> int | None:
    return int(token) if token.isdigit() else None


class StringResolver(ArgumentResolver):
    name = "string"

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED

        text = parameters[0]
        if argument.literals is not None:
            if text.lower() not in {literal.lower() for literal in argument.literals}:
                return hikari.UNDEFINED

        return text.lower() if argument.lowercase else text


class RestOfMessageResolver(ArgumentResolver):
    """Takes everything left in the message as one string."""

    name = "...string"
    consumes_rest = True

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED

        text = " ".join(parameters)
        return text.lower() if argument.lowercase else text


class NumberResolver(ArgumentResolver):
    name = "number"

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED

        token = parameters[0]
        try:
            value: int | float = int(token)
        except ValueError:
            try:
                value = float(token)
            except ValueError:
                return hikari.UNDEFINED

        if value != value:  # NaN
            return hikari.UNDEFINED
        if argument.minimum is not None and value < argument.minimum:
            return hikari.UNDEFINED
        if argument.maximum is not None and value > argument.maximum:
            return hikari.UNDEFINED

        return value


class BooleanResolver(ArgumentResolver):
    name = "boolean"

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED

        word = parameters[0].lower()
        if word in TRUTHY_WORDS:
            return True
        if word in FALSY_WORDS:
            return False
        return hikari.UNDEFINED


class SubcommandResolver(ArgumentResolver):
    """Yields the name of the requested subcommand, lowercased."""

    name = "subcommand"

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED
        return parameters[0].lower()


class DurationResolver(ArgumentResolver):
    """Turns strings like ``1d5h`` into milliseconds."""

    name = "duration"

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED

        milliseconds = string_to_milliseconds(parameters[0])
        if milliseconds is None:
            return hikari.UNDEFINED
        return milliseconds


class MemberResolver(ArgumentResolver):
    """Parser for guild members given as mention, ID or name."""

    name = "member"

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED

        guild = message.get_guild()
        if not guild:
            return hikari.UNDEFINED

        token = parameters[0]
        user_input = _strip_mention(_strip_mention(token, "<@!"), "<@")
        user_id = _snowflake(user_input)
        if user_id is not None:
            member = guild.get_member(user_id)
            return member if member else hikari.UNDEFINED

        # Try to find by username
        wanted = token.lower()
        for member in guild.get_members().values():
            if member.username.lower() == wanted or member.display_name.lower() == wanted:
                return member

        return hikari.UNDEFINED


class RoleResolver(ArgumentResolver):
    """Parser for roles given as mention, ID or name."""

    name = "role"

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED

        guild = message.get_guild()
        if not guild:
            return hikari.UNDEFINED

        token = parameters[0]
        role_id = _snowflake(_strip_mention(token, "<@&"))
        if role_id is not None:
            role = guild.get_role(role_id)
            return role if role else hikari.UNDEFINED

        wanted = token.lower()
        for role in guild.get_roles().values():
            if role.name.lower() == wanted:
                return role

        return hikari.UNDEFINED


class TextChannelResolver(ArgumentResolver):
    """Parser for text channels given as mention, ID or name."""

    name = "textchannel"

    async def execute(self, argument, parameters, message):
        if not parameters:
            return hikari.UNDEFINED

        guild = message.get_guild()
        if not guild:
            return hikari.UNDEFINED

        token = parameters[0]
        channel = None
        channel_id = _snowflake(_strip_mention(token, "<#"))
        if channel_id is not None:
            channel = guild.get_channel(channel_id)

        if channel is None:
            wanted = token.lower()
            for candidate in guild.get_channels().values():
                if candidate.name == wanted:
                    channel = candidate
                    break

        if channel is None or channel.type != hikari.ChannelType.GUILD_TEXT:
            return hikari.UNDEFINED

        return channel


DEFAULT_RESOLVERS: tuple[type[ArgumentResolver], ...] = (
    StringResolver,
    RestOfMessageResolver,
    NumberResolver,
    BooleanResolver,
    SubcommandResolver,
    DurationResolver,
    MemberResolver,
    RoleResolver,
    TextChannelResolver,
)


def register_default_resolvers(registry: BotRegistry) -> None:
    for resolver_class in DEFAULT_RESOLVERS:
        registry.register_resolver(resolver_class())
    logger.info(f"Registered {len(DEFAULT_RESOLVERS)} built-in argument resolvers")
