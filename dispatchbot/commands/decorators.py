"""Command decorators for declaring prefix commands in plugin modules."""

from collections.abc import Callable, Sequence

from .types import Argument, Command, Cooldown, PermissionCheck, PermissionLevels


def _build(
    func: Callable,
    name: str | None,
    description: str,
    aliases: Sequence[str] | None,
    arguments: Sequence[Argument] | None,
    subcommands: Sequence[Callable] | None,
    **options,
) -> Command:
    subs = {}
    for sub_func in subcommands or []:
        sub = getattr(sub_func, "_subcommand", None)
        if sub is None:
            raise TypeError(f"{sub_func!r} is not decorated with @subcommand")
        subs[sub.name] = sub

    return Command(
        name=name or func.__name__,
        execute=func,
        description=description or (func.__doc__ or "").strip(),
        aliases=tuple(aliases or ()),
        arguments=tuple(arguments or ()),
        subcommands=subs,
        **options,
    )


def command(
    name: str | None = None,
    description: str = "",
    aliases: Sequence[str] | None = None,
    arguments: Sequence[Argument] | None = None,
    subcommands: Sequence[Callable] | None = None,
    permission_levels: Sequence[PermissionLevels] | PermissionCheck | None = None,
    guild_only: bool = False,
    dm_only: bool = False,
    nsfw: bool = False,
    cooldown: Cooldown | None = None,
):
    """
    Declare a prefix command.

    The built :class:`Command` is stored on the function and picked up when
    the plugin loader imports the module.
    """

    def decorator(func):
        func._command = _build(
            func,
            name,
            description,
            aliases,
            arguments,
            subcommands,
            permission_levels=permission_levels,
            guild_only=guild_only,
            dm_only=dm_only,
            nsfw=nsfw,
            cooldown=cooldown,
        )
        return func

    return decorator


def subcommand(
    name: str | None = None,
    description: str = "",
    aliases: Sequence[str] | None = None,
    permission_levels: Sequence[PermissionLevels] | PermissionCheck | None = None,
    guild_only: bool = False,
    dm_only: bool = False,
    nsfw: bool = False,
    cooldown: Cooldown | None = None,
):
    """Declare a subcommand; pass the function to ``@command(subcommands=[...])``."""

    def decorator(func):
        func._subcommand = _build(
            func,
            (name or func.__name__).lower(),
            description,
            aliases,
            None,
            None,
            permission_levels=permission_levels,
            guild_only=guild_only,
            dm_only=dm_only,
            nsfw=nsfw,
            cooldown=cooldown,
        )
        return func

    return decorator
