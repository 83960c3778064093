import hikari

from dispatchbot.commands import Argument, command, subcommand
from dispatchbot.core.utils import send_response

PLUGIN_METADATA = {
    "name": "Config",
    "version": "1.0.0",
    "author": "dispatchbot",
    "description": "Per-guild settings",
}

SETTINGS = ("prefix",)


async def _can_manage_guild(ctx, command, guild) -> bool:
    if guild is None or ctx.member is None:
        return False
    if guild.owner_id == ctx.author.id:
        return True

    permissions = hikari.Permissions.NONE
    for role in ctx.member.get_roles():
        permissions |= role.permissions
    return bool(permissions & (hikari.Permissions.MANAGE_GUILD | hikari.Permissions.ADMINISTRATOR))


@subcommand("get", aliases=["show"])
async def config_get(ctx, args, guild=None) -> None:
    if args.get("key") != "prefix":
        await send_response(ctx, f"available settings: {', '.join(SETTINGS)}")
        return

    prefix = ctx.bot.registry.resolve_prefix(ctx.guild_id)
    await send_response(ctx, f"the prefix here is `{prefix}`")


@subcommand("set", permission_levels=_can_manage_guild)
async def config_set(ctx, args, guild=None) -> None:
    value = args.get("value")
    if args.get("key") != "prefix" or not value:
        await send_response(ctx, "usage: `config set prefix <new prefix>`")
        return

    ctx.bot.registry.set_guild_prefix(ctx.guild_id, value)
    await send_response(ctx, f"the prefix is now `{value}`")


@command(
    "config",
    description="Show or change guild settings",
    aliases=["settings"],
    arguments=[
        Argument("subcommand", type="subcommand"),
        Argument("key", type="string", literals=SETTINGS, lowercase=True),
        Argument("value", type="...string"),
    ],
    subcommands=[config_get, config_set],
    guild_only=True,
)
async def config(ctx, args, guild=None) -> None:
    await send_response(ctx, "use `config get <setting>` or `config set <setting> <value>`.")
