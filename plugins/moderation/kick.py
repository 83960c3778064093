import logging

import hikari

from dispatchbot.commands import Argument, Cooldown, command
from dispatchbot.core.utils import send_response

logger = logging.getLogger(__name__)

PLUGIN_METADATA = {
    "name": "Kick",
    "version": "1.0.0",
    "author": "dispatchbot",
    "description": "Remove members from a guild",
}


async def _can_kick(ctx, command, guild) -> bool:
    if guild is None or ctx.member is None:
        return False
    if guild.owner_id == ctx.author.id:
        return True

    permissions = hikari.Permissions.NONE
    for role in ctx.member.get_roles():
        permissions |= role.permissions
    return bool(permissions & (hikari.Permissions.KICK_MEMBERS | hikari.Permissions.ADMINISTRATOR))


async def _member_missing(ctx) -> None:
    await send_response(ctx, "you need to tell me who to kick.")


@command(
    "kick",
    description="Kick a member from the guild",
    arguments=[
        Argument("member", type="member", required=True, missing=_member_missing),
        Argument("reason", type="...string", default="No reason provided"),
    ],
    permission_levels=_can_kick,
    guild_only=True,
    cooldown=Cooldown(seconds=5, allowed_uses=2),
)
async def kick(ctx, args, guild=None) -> None:
    member: hikari.Member = args["member"]
    reason = args["reason"]

    await member.kick(reason=f"{ctx.author.username}: {reason}")
    logger.info(f"{ctx.author.username} kicked {member.username} from {guild.name if guild else 'unknown'}: {reason}")
    await send_response(ctx, f"👢 **{member.display_name}** was kicked. Reason: {reason}")
