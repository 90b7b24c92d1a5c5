"""Listener implementations shipped with the bot."""

from __future__ import annotations

import inspect
import logging
from typing import Iterable, List

from slashbot.core.events import EventBus
from slashbot.domain.commands import Command
from slashbot.domain.invocation import Invocation

from .events import CommandCompleted, CommandErrored, CommandTerminated
from .interfaces import CommandListener

logger = logging.getLogger(__name__)


def _context(invocation: Invocation) -> dict:
    return {
        "command": invocation.command_path,
        "user_id": invocation.user_id,
        "channel_id": invocation.channel_id,
        "group_id": invocation.group_id,
    }


class LoggingListener:

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logging.getLogger("slashbot.commands")

    def on_terminated(self, invocation: Invocation, command: Command) -> None:
        self._logger.info("command terminated", extra=_context(invocation))

    def on_completed(self, invocation: Invocation, command: Command) -> None:
        self._logger.info("command completed", extra=_context(invocation))

    def on_exception(
        self, invocation: Invocation, command: Command, error: BaseException
    ) -> None:
        self._logger.error(
            "command failed: %s",
            error,
            exc_info=(type(error), error, error.__traceback__),
            extra=_context(invocation),
        )


class EventPublishingListener:
    """Republishes dispatch outcomes on the event bus."""

    def __init__(self, event_bus: EventBus) -> None:
        self._event_bus = event_bus

    async def on_terminated(self, invocation: Invocation, command: Command) -> None:
        await self._event_bus.publish(
            CommandTerminated(
                command=invocation.command_path,
                user_id=invocation.user_id,
                channel_id=invocation.channel_id,
                group_id=invocation.group_id,
            )
        )

    async def on_completed(self, invocation: Invocation, command: Command) -> None:
        await self._event_bus.publish(
            CommandCompleted(
                command=invocation.command_path,
                user_id=invocation.user_id,
                channel_id=invocation.channel_id,
                group_id=invocation.group_id,
            )
        )

    async def on_exception(
        self, invocation: Invocation, command: Command, error: BaseException
    ) -> None:
        await self._event_bus.publish(
            CommandErrored(
                command=invocation.command_path,
                user_id=invocation.user_id,
                channel_id=invocation.channel_id,
                group_id=invocation.group_id,
                error=str(error),
            )
        )


class CompositeListener:
    """Forwards each notification to several listeners, in order."""

    def __init__(self, listeners: Iterable[CommandListener]) -> None:
        self._listeners: List[CommandListener] = list(listeners)

    async def on_terminated(self, invocation: Invocation, command: Command) -> None:
        for listener in self._listeners:
            result = listener.on_terminated(invocation, command)
            if inspect.isawaitable(result):
                await result

    async def on_completed(self, invocation: Invocation, command: Command) -> None:
        for listener in self._listeners:
            result = listener.on_completed(invocation, command)
            if inspect.isawaitable(result):
                await result

    async def on_exception(
        self, invocation: Invocation, command: Command, error: BaseException
    ) -> None:
        for listener in self._listeners:
            result = listener.on_exception(invocation, command, error)
            if inspect.isawaitable(result):
                await result


__all__ = ["CompositeListener", "EventPublishingListener", "LoggingListener"]
