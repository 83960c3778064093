"""Built-in inhibitors.

An inhibitor returns True to stop a command from running. They all run for
every command, so each one first checks whether it applies at all.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import hikari

from .core.utils import humanize_milliseconds, send_alert_response

if TYPE_CHECKING:
    from .commands.types import Command
    from .core.message import MessageContext
    from .core.registry import BotRegistry

logger = logging.getLogger(__name__)


async def guild_only(message: MessageContext, command: Command, guild: hikari.GatewayGuild | None = None) -> bool:
    return command.guild_only and message.is_dm


async def dm_only(message: MessageContext, command: Command, guild: hikari.GatewayGuild | None = None) -> bool:
    return command.dm_only and not message.is_dm


async def nsfw(message: MessageContext, command: Command, guild: hikari.GatewayGuild | None = None) -> bool:
    if not command.nsfw:
        return False

    channel = message.get_channel()
    return not getattr(channel, "is_nsfw", False)


class PermissionLevelInhibitor:
    """Hook point for permission levels.

    The registry only stores the checks; which levels exist and who holds
    them is up to the plugins that register them.
    """

    def __init__(self, registry: BotRegistry) -> None:
        self.registry = registry

    async def __call__(self, message: MessageContext, command: Command, guild: hikari.GatewayGuild | None = None) -> bool:
        levels = command.permission_levels
        if not levels:
            return False

        if callable(levels):
            return not await levels(message, command, guild)

        for level in levels:
            check = self.registry.permission_levels.get(level)
            if check and await check(message, command, guild):
                return False

        logger.debug(f"{message.author.username} lacks permission levels {[level.name for level in levels]} for {command.name}")
        return True


@dataclass(slots=True)
class _Usage:
    used: int
    expires_at: float


class CooldownInhibitor:
    """Limits how often each user may run a command with a cooldown."""

    def __init__(
        self, clock: Callable[[], float] = time.monotonic, alert_timeout: float = 10, sweep_interval: float = 60
    ) -> None:
        self.clock = clock
        self.alert_timeout = alert_timeout
        self.sweep_interval = sweep_interval
        self.usages: dict[tuple[int, str], _Usage] = {}
        self._next_sweep = clock() + sweep_interval

    def _sweep(self, now: float) -> None:
        expired = [key for key, usage in self.usages.items() if now >= usage.expires_at]
        for key in expired:
            del self.usages[key]
        self._next_sweep = now + self.sweep_interval
        if expired:
            logger.debug(f"Dropped {len(expired)} expired cooldown entries")

    async def __call__(self, message: MessageContext, command: Command, guild: hikari.GatewayGuild | None = None) -> bool:
        cooldown = command.cooldown
        if not cooldown:
            return False

        now = self.clock()
        if now >= self._next_sweep:
            self._sweep(now)

        key = (message.author.id, command.name)
        usage = self.usages.get(key)

        if usage is None or now >= usage.expires_at:
            self.usages[key] = _Usage(used=1, expires_at=now + cooldown.seconds)
            return False

        if usage.used < cooldown.allowed_uses:
            usage.used += 1
            return False

        remaining = (usage.expires_at - now) * 1000
        logger.debug(f"{message.author.username} is on cooldown for {command.name} ({remaining:.0f}ms left)")
        await send_alert_response(
            message,
            f"you must wait **{humanize_milliseconds(remaining) or '1s'}** before using the **{command.name}** command again.",
            timeout=self.alert_timeout,
            reason="cooldown",
        )
        return True


def register_default_inhibitors(registry: BotRegistry, alert_timeout: float = 10) -> None:
    registry.register_inhibitor("guild_only", guild_only)
    registry.register_inhibitor("dm_only", dm_only)
    registry.register_inhibitor("nsfw", nsfw)
    registry.register_inhibitor("permissions", PermissionLevelInhibitor(registry))
    registry.register_inhibitor("cooldown", CooldownInhibitor(alert_timeout=alert_timeout))
    logger.info("Registered built-in inhibitors")
