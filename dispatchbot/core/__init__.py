from .bot import DispatchBot
from .command_handler import CommandHandler
from .message import MessageContext
from .monitors import MonitorRunner
from .plugin_loader import PluginLoader
from .registry import BotRegistry

__all__ = ["DispatchBot", "CommandHandler", "MessageContext", "MonitorRunner", "PluginLoader", "BotRegistry"]
