"""Utility functions for the command framework."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

import hikari

if TYPE_CHECKING:
    from .message import MessageContext
    from .registry import BotRegistry

logger = logging.getLogger(__name__)

SECOND = 1000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7

_UNIT_MILLISECONDS = {"w": WEEK, "d": DAY, "h": HOUR, "m": MINUTE, "s": SECOND}
_DURATION_PART = re.compile(r"(\d+)([wdhms])", re.IGNORECASE)

# Keeps pending alert deletions referenced until they finish
_background_tasks: set[asyncio.Task] = set()


async def send_response(message: MessageContext, content: str) -> hikari.Message:
    """
    Reply to a message, mentioning its author.

    Args:
        message: The message being answered
        content: Text to send after the mention

    Returns:
        The created message
    """
    return await message.respond(f"<@{message.author.id}>, {content}")


async def send_embed(
    message: MessageContext, embed: hikari.Embed, content: hikari.UndefinedOr[str] = hikari.UNDEFINED
) -> hikari.Message:
    """Send an embed to the message's channel, optionally with some text."""
    return await message.respond(content, embed=embed)


async def send_alert_response(
    message: MessageContext, content: str, timeout: float = 10, reason: str = ""
) -> hikari.Message:
    """
    Reply with a mention and delete the reply after ``timeout`` seconds.

    Args:
        message: The message being answered
        content: Text to send after the mention
        timeout: Seconds to wait before deleting the reply
        reason: Logged when the reply is deleted

    Returns:
        The created message
    """
    response = await send_response(message, content)

    async def _delete_later() -> None:
        await asyncio.sleep(timeout)
        try:
            await response.delete()
            logger.debug(f"Deleted alert response {response.id}: {reason or 'timeout'}")
        except hikari.HTTPError as e:
            logger.warning(f"Could not delete alert response {response.id}: {e}")

    task = asyncio.create_task(_delete_later())
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return response


def humanize_milliseconds(milliseconds: float) -> str:
    """Format milliseconds as a short string like ``1d 5h 3m 2s``."""
    total_seconds = int(milliseconds // 1000)

    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = [
        f"{value}{unit}"
        for value, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s"))
        if value
    ]
    return " ".join(parts)


def string_to_milliseconds(text: str) -> int | None:
    """
    Convert a duration string like ``1d5h`` or ``2w`` to milliseconds.

    Returns None when the text is not made up entirely of number/unit pairs
    or when any amount is zero.
    """
    if not text:
        return None

    matches = list(_DURATION_PART.finditer(text))
    if not matches or "".join(m.group(0) for m in matches) != text:
        return None

    total = 0
    for match in matches:
        amount = int(match.group(1))
        if not amount:
            return None
        total += amount * _UNIT_MILLISECONDS[match.group(2).lower()]

    return total


def create_command_aliases(registry: BotRegistry, command_name: str, aliases: str | Iterable[str]) -> None:
    """Register aliases for a command; see :meth:`BotRegistry.register_alias`."""
    registry.register_alias(command_name, aliases)
