import logging
from dataclasses import dataclass

import hikari

from config.settings import BotSettings, settings as default_settings

from .command_handler import CommandHandler
from .errors import ErrorReporter, LoggingErrorReporter
from .message import MessageContext
from .monitors import MonitorRunner
from .plugin_loader import PluginLoader
from .registry import BotRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BotOverview:
    command_count: int
    alias_count: int
    plugin_count: int
    guild_count: int


class DispatchBot:
    def __init__(self, settings: BotSettings | None = None, error_reporter: ErrorReporter | None = None) -> None:
        self.settings = settings or default_settings

        intents = (
            hikari.Intents.GUILDS
            | hikari.Intents.GUILD_MEMBERS
            | hikari.Intents.ALL_MESSAGES
            | hikari.Intents.MESSAGE_CONTENT
        )
        self.hikari_bot = hikari.GatewayBot(token=self.settings.discord_token, intents=intents)

        self.registry = BotRegistry(default_prefix=self.settings.bot_prefix)
        self.plugin_loader = PluginLoader(self.registry)
        self.command_handler = CommandHandler(
            self.registry,
            error_reporter or LoggingErrorReporter(notify_user=self.settings.report_errors_to_user),
        )
        self.monitor_runner = MonitorRunner(self.registry)

        self._register_builtins()

        for directory in self.settings.plugin_directories:
            self.plugin_loader.add_plugin_directory(directory)

        self._setup_event_listeners()

    def _register_builtins(self) -> None:
        # Imported here to avoid a circular import with the commands package
        from ..commands.arguments import register_default_resolvers
        from ..inhibitors import register_default_inhibitors

        register_default_resolvers(self.registry)
        register_default_inhibitors(self.registry, alert_timeout=self.settings.alert_timeout)
        self.registry.register_monitor(self.command_handler.as_monitor())

        for guild_id, prefix in self.settings.guild_prefixes.items():
            self.registry.set_guild_prefix(guild_id, prefix)

    def load_plugins(self) -> list[str]:
        """Load plugins and close the registry for further registration."""
        if self.registry.frozen:
            return self.plugin_loader.get_loaded_plugins()

        loaded = self.plugin_loader.load_all_plugins(self.settings.enabled_plugins)
        if loaded:
            logger.info(f"Loaded plugins: {loaded}")
        else:
            logger.warning("No valid plugins found to load")

        self.registry.freeze()
        return loaded

    def _setup_event_listeners(self) -> None:
        @self.hikari_bot.listen(hikari.StartingEvent)
        async def on_starting(event: hikari.StartingEvent) -> None:
            logger.info("Bot is starting...")

        @self.hikari_bot.listen(hikari.ShardReadyEvent)
        async def on_ready(event: hikari.ShardReadyEvent) -> None:
            logger.info(f"Bot is ready! Logged in as {event.my_user}")

        @self.hikari_bot.listen(hikari.MessageCreateEvent)
        async def on_message_create(event: hikari.MessageCreateEvent) -> None:
            await self.handle_event(event)

    async def handle_event(self, event: hikari.MessageCreateEvent) -> None:
        logger.debug(f"Message received: '{event.content}' from {event.author.username}")
        await self.monitor_runner.run(MessageContext(event, self))

    def get_overview(self) -> BotOverview:
        guilds_view = self.hikari_bot.cache.get_guilds_view()
        return BotOverview(
            command_count=len(self.registry.commands),
            alias_count=len(self.registry.command_aliases),
            plugin_count=len(self.plugin_loader.get_loaded_plugins()),
            guild_count=len(guilds_view),
        )

    def run(self) -> None:
        self.load_plugins()
        try:
            logger.info("Starting Discord bot...")
            self.hikari_bot.run()
        except KeyboardInterrupt:
            logger.info("Bot stopped by user")
        except Exception as e:
            logger.error(f"Bot crashed: {e}")
            raise
