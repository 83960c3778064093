import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from ..commands.types import Command, Inhibitor, Monitor, PermissionCheck, PermissionLevels
from .errors import DuplicateAliasError, DuplicateCommandError, RegistryFrozenError

logger = logging.getLogger(__name__)


class BotRegistry:
    """Holds every pluggable entity by name.

    Plugins populate the registry while the bot starts up. Once
    :meth:`freeze` is called the dispatch path only reads from it, so
    further registration attempts raise :class:`RegistryFrozenError`.
    Guild prefixes are plain data and stay writable.
    """

    _STAGED = ("commands", "command_aliases", "arguments", "inhibitors", "monitors", "permission_levels")

    def __init__(self, default_prefix: str = "!") -> None:
        self.default_prefix = default_prefix
        self.commands: dict[str, Command] = {}
        self.command_aliases: dict[str, str] = {}
        self.arguments: dict[str, Any] = {}
        self.inhibitors: dict[str, Inhibitor] = {}
        self.monitors: dict[str, Monitor] = {}
        self.permission_levels: dict[PermissionLevels, PermissionCheck] = {}
        self.guild_prefixes: dict[int, str] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True
        logger.info(
            f"Registry frozen with {len(self.commands)} commands, {len(self.command_aliases)} aliases, "
            f"{len(self.arguments)} resolvers, {len(self.inhibitors)} inhibitors, {len(self.monitors)} monitors"
        )

    @contextmanager
    def staged(self) -> Iterator[None]:
        """Undo every registration made inside the block when it raises."""
        snapshot = {name: dict(getattr(self, name)) for name in self._STAGED}
        try:
            yield
        except Exception:
            for name, contents in snapshot.items():
                current = getattr(self, name)
                current.clear()
                current.update(contents)
            raise

    def _ensure_writable(self, what: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(what)

    def register_alias(self, command_name: str, aliases: str | Iterable[str]) -> None:
        """Map one or more aliases to ``command_name``.

        All aliases are checked before any is inserted, so a duplicate
        leaves the alias map exactly as it was.
        """
        self._ensure_writable(f"aliases for {command_name}")
        if isinstance(aliases, str):
            aliases = [aliases]
        aliases = list(aliases)

        seen: set[str] = set()
        for alias in aliases:
            if alias in self.command_aliases or alias in seen:
                raise DuplicateAliasError(alias)
            seen.add(alias)

        for alias in aliases:
            self.command_aliases[alias] = command_name

        if aliases:
            logger.debug(f"Added aliases for {command_name}: {aliases}")

    def register_command(self, command: Command) -> None:
        self._ensure_writable(f"command {command.name}")
        if command.name in self.commands:
            raise DuplicateCommandError(command.name)

        subcommand_aliases = [
            (f"{command.name}-{alias.lower()}", sub.name)
            for sub in command.subcommands.values()
            for alias in sub.aliases
        ]
        # Validate everything up front so a rejected command leaves no aliases behind
        seen: set[str] = set()
        for alias in [*command.aliases, *(key for key, _ in subcommand_aliases)]:
            if alias in self.command_aliases or alias in seen:
                raise DuplicateAliasError(alias)
            seen.add(alias)

        self.register_alias(command.name, command.aliases)
        for alias, sub_name in subcommand_aliases:
            self.register_alias(sub_name, alias)

        self.commands[command.name] = command
        logger.debug(
            f"Added command: {command.name} (aliases: {list(command.aliases)}, "
            f"subcommands: {list(command.subcommands)})"
        )

    def register_resolver(self, resolver: Any) -> None:
        self._ensure_writable(f"resolver {resolver.name}")
        self.arguments[resolver.name] = resolver
        logger.debug(f"Added argument resolver: {resolver.name}")

    def register_inhibitor(self, name: str, inhibitor: Inhibitor) -> None:
        self._ensure_writable(f"inhibitor {name}")
        self.inhibitors[name] = inhibitor
        logger.debug(f"Added inhibitor: {name}")

    def inhibitor(self, name: str) -> Callable[[Inhibitor], Inhibitor]:
        def decorator(func: Inhibitor) -> Inhibitor:
            self.register_inhibitor(name, func)
            return func

        return decorator

    def register_monitor(self, monitor: Monitor) -> None:
        self._ensure_writable(f"monitor {monitor.name}")
        self.monitors[monitor.name] = monitor
        logger.debug(f"Added monitor: {monitor.name}")

    def register_permission_level(self, level: PermissionLevels, check: PermissionCheck) -> None:
        self._ensure_writable(f"permission level {level.name}")
        self.permission_levels[level] = check
        logger.debug(f"Added permission level check: {level.name}")

    def get_command(self, name: str) -> Command | None:
        command = self.commands.get(name)
        if command:
            return command

        alias = self.command_aliases.get(name)
        if not alias:
            return None

        return self.commands.get(alias)

    def get_resolver(self, type_name: str) -> Any:
        return self.arguments.get(type_name)

    def resolve_prefix(self, guild_id: int | None = None) -> str:
        prefix = self.guild_prefixes.get(guild_id) if guild_id else None
        return prefix or self.default_prefix

    def set_guild_prefix(self, guild_id: int, prefix: str) -> None:
        self.guild_prefixes[guild_id] = prefix
        logger.info(f"Prefix for guild {guild_id} set to {prefix!r}")
