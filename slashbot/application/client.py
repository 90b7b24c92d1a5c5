from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from slashbot.core.config import (
    DEFAULT_ERROR,
    DEFAULT_SUCCESS,
    DEFAULT_WARNING,
    BotConfig,
)
from slashbot.core.exceptions import CommandRegistrationError, UnknownCommandError
from slashbot.domain.commands import Command
from slashbot.domain.invocation import Invocation

from .command_data import CommandData, build_command_data
from .dispatcher import GuardedDispatcher
from .interfaces import CommandListener, CooldownStore

logger = logging.getLogger(__name__)


class CommandClient:
    """Shared configuration and registry handed to every dispatch."""

    def __init__(
        self,
        *,
        owner_id: int,
        cooldowns: CooldownStore,
        co_owner_ids: Iterable[int] = (),
        success: str = DEFAULT_SUCCESS,
        warning: str = DEFAULT_WARNING,
        error: str = DEFAULT_ERROR,
        listener: Optional[CommandListener] = None,
        dispatcher: Optional[GuardedDispatcher] = None,
    ) -> None:
        self.owner_id = owner_id
        self.co_owner_ids: Tuple[int, ...] = tuple(co_owner_ids)
        self.success = success
        self.warning = warning
        self.error = error
        self.cooldowns = cooldowns
        self.listener = listener
        self._dispatcher = dispatcher or GuardedDispatcher()
        self._commands: Dict[str, Command] = {}

    @classmethod
    def from_config(
        cls,
        config: BotConfig,
        *,
        cooldowns: CooldownStore,
        listener: Optional[CommandListener] = None,
    ) -> "CommandClient":

        return cls(
            owner_id=config.owner_id,
            co_owner_ids=config.co_owner_ids,
            success=config.success_emoji,
            warning=config.warning_emoji,
            error=config.error_emoji,
            cooldowns=cooldowns,
            listener=listener,
        )

    @property
    def commands(self) -> Tuple[Command, ...]:
        return tuple(self._commands.values())

    def add_command(self, command: Command) -> None:

        name = command.descriptor.name
        if name in self._commands:
            raise CommandRegistrationError(f"Command '{name}' is already registered")
        self._commands[name] = command
        logger.debug("Registered command %s", name)

    def add_commands(self, commands: Iterable[Command]) -> None:

        for command in commands:
            self.add_command(command)

    def find_command(self, path: str) -> Optional[Command]:
        """Resolve ``"name"`` or ``"name/child"`` to a registered command."""

        name, _, child_name = path.partition("/")
        command = self._commands.get(name)
        if command is None or not child_name:
            return command
        return command.descriptor.find_child(child_name)

    def is_owner(self, user_id: int) -> bool:

        if user_id == self.owner_id:
            return True
        return user_id in self.co_owner_ids

    def remaining_cooldown(self, key: str) -> int:

        return self.cooldowns.remaining(key)

    def apply_cooldown(self, key: str, seconds: int) -> None:

        self.cooldowns.apply(key, seconds)

    async def handle(self, invocation: Invocation) -> None:

        command = self.find_command(invocation.command_path)
        if command is None:
            raise UnknownCommandError(invocation.command_path)
        await self._dispatcher.dispatch(command, invocation, self)

    def command_data(self) -> List[CommandData]:

        return [build_command_data(command.descriptor) for command in self.commands]


__all__ = ["CommandClient"]
