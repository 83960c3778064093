"""Command, argument and monitor definitions."""

from __future__ import annotations

import enum
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import hikari

if TYPE_CHECKING:
    from ..core.message import MessageContext

CommandCallback = Callable[["MessageContext", dict[str, Any], "hikari.GatewayGuild | None"], Awaitable[None]]
PermissionCheck = Callable[["MessageContext", "Command", "hikari.GatewayGuild | None"], Awaitable[bool]]
Inhibitor = Callable[["MessageContext", "Command", "hikari.GatewayGuild | None"], Awaitable[bool]]
MissingCallback = Callable[["MessageContext"], Any]


class PermissionLevels(enum.Enum):
    MEMBER = "member"
    MODERATOR = "moderator"
    ADMIN = "admin"
    SERVER_OWNER = "server_owner"
    BOT_SUPPORT = "bot_support"
    BOT_DEVS = "bot_devs"
    BOT_OWNER = "bot_owner"


@dataclass(frozen=True, slots=True)
class Argument:
    """A single positional argument of a prefix command.

    ``type`` is the name of the resolver used to turn tokens into a value.
    ``default`` stays ``hikari.UNDEFINED`` when the argument has no default,
    so falsy defaults such as ``0`` or ``""`` still count.
    """

    name: str
    type: str = "string"
    description: str = ""
    required: bool = False
    default: hikari.UndefinedOr[Any] = hikari.UNDEFINED
    missing: MissingCallback | None = None
    literals: Sequence[str] | None = None
    lowercase: bool = False
    minimum: float | None = None
    maximum: float | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not hikari.UNDEFINED


@dataclass(frozen=True, slots=True)
class Cooldown:
    seconds: float
    allowed_uses: int = 1


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    execute: CommandCallback
    description: str = ""
    aliases: Sequence[str] = ()
    arguments: Sequence[Argument] = ()
    subcommands: Mapping[str, Command] = field(default_factory=dict)
    permission_levels: Sequence[PermissionLevels] | PermissionCheck | None = None
    guild_only: bool = False
    dm_only: bool = False
    nsfw: bool = False
    cooldown: Cooldown | None = None
    plugin_name: str | None = None

    @property
    def is_subcommand_dispatcher(self) -> bool:
        return bool(self.arguments) and self.arguments[0].type == "subcommand"


@dataclass(frozen=True, slots=True)
class Monitor:
    """Runs on every inbound message, e.g. the command handler itself."""

    name: str
    execute: Callable[["MessageContext"], Awaitable[Any]]
    ignore_bots: bool = True
    ignore_dm: bool = False
