from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .message import MessageContext

logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """Raised when a plugin tries to register something the registry refuses."""


class DuplicateAliasError(RegistrationError):
    def __init__(self, alias: str) -> None:
        super().__init__(f"The {alias} already exists as a command alias.")
        self.alias = alias


class DuplicateCommandError(RegistrationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"The {name} command is already registered.")
        self.name = name


class RegistryFrozenError(RegistrationError):
    def __init__(self, what: str) -> None:
        super().__init__(f"Cannot register {what}: the registry is frozen once dispatch has started.")


class ErrorReporter(Protocol):
    async def report(self, message: MessageContext, error: Exception) -> None: ...


class LoggingErrorReporter:
    """Logs uncaught command errors and tells the user the command failed."""

    def __init__(self, notify_user: bool = True) -> None:
        self.notify_user = notify_user

    async def report(self, message: MessageContext, error: Exception) -> None:
        logger.error(f"Unhandled error for message '{message.content}': {error}")
        logger.debug(f"Traceback: {''.join(traceback.format_exception(type(error), error, error.__traceback__))}")

        if self.notify_user:
            await message.respond(f"❌ Command failed: {error}")
