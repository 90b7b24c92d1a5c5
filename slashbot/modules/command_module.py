"""Module registering slash commands with the Telegram application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List

from telegram.ext import CommandHandler, ContextTypes

from ..application.client import CommandClient
from ..commands.builtin import builtin_commands
from ..domain.commands import Command
from ..handlers.commands import log_handler_error, make_command_callback
from ..presentation.telegram.command_menu import (
    MAX_COMMAND_LENGTH,
    child_alias,
    publish_commands,
)
from .base import Module, ModuleContext
from .events import CommandsPublished

logger = logging.getLogger(__name__)


def handler_routes(client: CommandClient) -> List[tuple[str, str]]:
    """Return ``(telegram_name, command_path)`` pairs for every command.

    Children are reachable as ``/parent child`` and, when the flat name fits
    Telegram's limit, as ``/parent_child``.
    """

    routes = []
    for command in client.commands:
        name = command.descriptor.name
        routes.append((name, name))
        for child in command.descriptor.children:
            child_name = child.descriptor.name
            alias = child_alias(name, child_name)
            if alias is None:
                logger.warning(
                    "No /%s_%s alias: name exceeds %s characters, use /%s %s",
                    name,
                    child_name,
                    MAX_COMMAND_LENGTH,
                    name,
                    child_name,
                )
                continue
            routes.append((alias, f"{name}/{child_name}"))
    return routes


@dataclass
class CommandModule(Module):
    name: str = "commands"
    order: int = 20
    commands_factory: Callable[[], List[Command]] = field(
        default=builtin_commands
    )

    def setup(self, context: ModuleContext) -> None:  # noqa: D401
        application = context.application
        config = context.config
        client = context.client

        client.add_commands(self.commands_factory())

        for telegram_name, path in handler_routes(client):
            application.add_handler(
                CommandHandler(
                    telegram_name,
                    make_command_callback(client, path, shard_id=config.shard_id),
                )
            )
        application.add_error_handler(log_handler_error)

        async def _publish() -> None:
            await publish_commands(application.bot, client)
            await context.event_bus.publish(
                CommandsPublished(count=len(client.commands))
            )

        context.on_startup(_publish)

        cleanup = getattr(client.cooldowns, "cleanup", None)
        job_queue = getattr(application, "job_queue", None)
        if cleanup is None or job_queue is None:
            logger.info("Periodic cooldown cleanup disabled")
            return

        async def _cleanup_job(_: ContextTypes.DEFAULT_TYPE) -> None:
            cleanup()

        job_queue.run_repeating(
            _cleanup_job,
            interval=config.cooldown_cleanup_interval_sec,
            first=config.cooldown_cleanup_interval_sec,
            name="cooldown_cleanup",
        )
