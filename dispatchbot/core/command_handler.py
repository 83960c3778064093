import asyncio
import inspect
import logging
from typing import Any

import hikari

from ..commands.types import Command, Monitor
from .errors import ErrorReporter, LoggingErrorReporter
from .message import MessageContext
from .registry import BotRegistry

logger = logging.getLogger(__name__)


class CommandHandler:
    """Turns prefixed messages into command invocations.

    One ``handle_message`` call runs per inbound message: prefix check,
    tokenizing, command lookup, argument parsing, optional subcommand
    lookup, inhibitors and finally the handler itself. Errors raised by
    inhibitors or handlers never escape; they are logged and handed to
    the error reporter.
    """

    def __init__(self, registry: BotRegistry, error_reporter: ErrorReporter | None = None) -> None:
        self.registry = registry
        self.error_reporter = error_reporter or LoggingErrorReporter()

    def resolve_prefix(self, guild_id: int | None = None) -> str:
        return self.registry.resolve_prefix(guild_id)

    def resolve_command(self, name: str) -> Command | None:
        return self.registry.get_command(name)

    def resolve_subcommand(self, command: Command, name: Any) -> Command | None:
        """Find a subcommand of ``command`` by name or alias."""
        if not command.subcommands or not name or not isinstance(name, str):
            return None

        subcommand_name = name.lower()
        subcommand = command.subcommands.get(subcommand_name)
        if subcommand:
            return subcommand

        # Check subcommand aliases
        alias = self.registry.command_aliases.get(f"{command.name}-{subcommand_name}")
        if alias:
            return command.subcommands.get(alias)
        return None

    async def parse_arguments(
        self, message: MessageContext, command: Command, parameters: list[str]
    ) -> dict[str, Any] | None:
        """Parse the tokens of a message against the command's arguments.

        Returns the parsed values keyed by argument name, or None when a
        required argument could not be resolved (its ``missing`` callback
        has already run by then).
        """
        args: dict[str, Any] = {}
        if not command.arguments:
            return args

        # Work on a copy so the caller's list is left alone
        params = list(parameters)

        for argument in command.arguments:
            resolver = self.registry.get_resolver(argument.type or "string")
            if not resolver:
                logger.debug(f"No resolver for argument type {argument.type!r}, skipping {argument.name}")
                continue

            result = await resolver.execute(argument, params, message)
            if result is not hikari.UNDEFINED:
                args[argument.name] = result
                # Uses up the rest of the message
                if resolver.consumes_rest:
                    break
                if params:
                    params.pop(0)
                continue

            if argument.has_default:
                args[argument.name] = argument.default
            elif argument.required:
                logger.debug(f"Missing required argument {argument.name} for {command.name}")
                if argument.missing:
                    outcome = argument.missing(message)
                    if inspect.isawaitable(outcome):
                        await outcome
                return None

        return args

    async def run_inhibitors(
        self, message: MessageContext, command: Command, guild: hikari.GatewayGuild | None = None
    ) -> bool:
        """Return True when the command may run.

        Every inhibitor runs, even when an earlier one already blocked,
        since some of them keep their own bookkeeping.
        """
        results = await asyncio.gather(
            *(inhibitor(message, command, guild) for inhibitor in self.registry.inhibitors.values())
        )

        if True in results:
            self.log_command(message, guild.name if guild else "DM", "Inhibited", command.name)
            return False

        return True

    def log_command(self, message: MessageContext, guild_name: str, type_: str, command_name: str) -> None:
        logger.info(f"[COMMAND:{command_name} - {type_}] by {message.author.username} in {guild_name}")

    async def handle_message(self, message: MessageContext) -> bool:
        # Ignore bot messages
        if message.is_bot:
            return False

        prefix = self.resolve_prefix(message.guild_id)
        if not message.content.startswith(prefix):
            return False

        parts = message.content[len(prefix):].split()
        if not parts:
            return False

        command_name, parameters = parts[0], parts[1:]
        command = self.resolve_command(command_name)
        if not command:
            return False

        guild = message.get_guild()
        guild_name = guild.name if guild else "DM"
        self.log_command(message, guild_name, "Ran", command_name)

        args = await self.parse_arguments(message, command, parameters)
        # A required argument was missing and has been handled already
        if args is None:
            return True

        try:
            if not command.is_subcommand_dispatcher:
                if not await self.run_inhibitors(message, command, guild):
                    return True
                await command.execute(message, args, guild)
                self.log_command(message, guild_name, "Success", command_name)
                return True

            subcommand = self.resolve_subcommand(command, args.get(command.arguments[0].name))
            if not subcommand:
                await command.execute(message, args, guild)
                self.log_command(message, guild_name, "Success", command_name)
                return True

            if not await self.run_inhibitors(message, subcommand, guild):
                return True
            await subcommand.execute(message, args, guild)
            self.log_command(message, guild_name, "Success", command_name)

        except Exception as e:
            self.log_command(message, guild_name, "Failed", command_name)
            logger.error(f"Error executing command {command_name}: {e}", exc_info=e)
            await self._report_error(message, e)

        return True

    async def _report_error(self, message: MessageContext, error: Exception) -> None:
        try:
            await self.error_reporter.report(message, error)
        except Exception as e:
            logger.error(f"Error reporter failed while handling {type(error).__name__}: {e}")

    def as_monitor(self) -> Monitor:
        return Monitor(name="commandHandler", execute=self.handle_message, ignore_bots=False)
