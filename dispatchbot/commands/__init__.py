"""Command system for prefix command plugins."""

from .arguments import ArgumentResolver, register_default_resolvers
from .decorators import command, subcommand
from .types import Argument, Command, Cooldown, Monitor, PermissionLevels

__all__ = [
    "Argument",
    "ArgumentResolver",
    "Command",
    "Cooldown",
    "Monitor",
    "PermissionLevels",
    "command",
    "register_default_resolvers",
    "subcommand",
]
