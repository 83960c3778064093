import asyncio
import logging

from ..commands.types import Monitor
from .message import MessageContext
from .registry import BotRegistry

logger = logging.getLogger(__name__)


class MonitorRunner:
    def __init__(self, registry: BotRegistry) -> None:
        self.registry = registry

    def _applies(self, monitor: Monitor, message: MessageContext) -> bool:
        if monitor.ignore_bots and message.is_bot:
            return False
        if monitor.ignore_dm and message.is_dm:
            return False
        return True

    async def run(self, message: MessageContext) -> None:
        monitors = [m for m in self.registry.monitors.values() if self._applies(m, message)]
        if not monitors:
            return

        results = await asyncio.gather(
            *(monitor.execute(message) for monitor in monitors), return_exceptions=True
        )
        for monitor, result in zip(monitors, results):
            if isinstance(result, Exception):
                logger.error(f"Error in monitor {monitor.name}: {result}", exc_info=result)
