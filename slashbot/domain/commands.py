"""Command descriptors, option schemas and the command capability."""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    FrozenSet,
    Iterable,
    Optional,
    Protocol,
    Tuple,
    Union,
    runtime_checkable,
)

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slashbot.core.exceptions import CommandRegistrationError, ValidationError

from .cooldown import CooldownScope
from .invocation import Invocation
from .permissions import Permission

if TYPE_CHECKING:  # pragma: no cover - typing only
    from slashbot.application.client import CommandClient

NAME_PATTERN = re.compile(r"^[a-z0-9_]{1,32}$")

_TRUE_WORDS = {"1", "true", "yes", "on", "y"}
_FALSE_WORDS = {"0", "false", "no", "off", "n"}

OptionValue = Union[str, int, float, bool]


class OptionType(Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    USER = "user"
    CHANNEL = "channel"
    ROLE = "role"


class OptionSpec(BaseModel):
    """Declared argument of a command."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = Field(min_length=1, max_length=100)
    type: OptionType = OptionType.STRING
    required: bool = False
    choices: Tuple[OptionValue, ...] = ()

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not NAME_PATTERN.match(value):
            raise ValueError(
                "Option names must be 1-32 lowercase letters, digits or underscores"
            )
        return value

    def parse(self, raw: str) -> OptionValue:
        """Convert one raw argument into this option's type."""

        value: OptionValue
        text = raw.strip()
        try:
            if self.type is OptionType.STRING:
                value = text
            elif self.type is OptionType.NUMBER:
                value = float(text)
            elif self.type is OptionType.BOOLEAN:
                lowered = text.lower()
                if lowered in _TRUE_WORDS:
                    value = True
                elif lowered in _FALSE_WORDS:
                    value = False
                else:
                    raise ValueError(text)
            else:
                # integers and user/channel/role ids
                value = int(text.lstrip("#"))
        except ValueError:
            raise ValidationError(
                f"Option `{self.name}` expects a {self.type.value}, got {raw!r}"
            )

        if self.choices and value not in self.choices:
            allowed = ", ".join(str(choice) for choice in self.choices)
            raise ValidationError(f"Option `{self.name}` must be one of: {allowed}")
        return value


@runtime_checkable
class Command(Protocol):
    """Anything with a descriptor and an ``execute`` coroutine is a command."""

    descriptor: "CommandDescriptor"

    async def execute(self, invocation: Invocation, client: "CommandClient") -> None: ...


@dataclass(frozen=True)
class CommandDescriptor:

    name: str
    help: str = "no help available"
    owner_only: bool = False
    required_role: Optional[str] = None
    user_permissions: Tuple[Permission, ...] = ()
    bot_permissions: Tuple[Permission, ...] = ()
    guild_only: bool = True
    cooldown: int = 0
    cooldown_scope: CooldownScope = CooldownScope.USER
    allowed_channels: Optional[FrozenSet[int]] = None
    guild_id: Optional[int] = None
    options: Tuple[OptionSpec, ...] = ()
    children: Tuple[Command, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not NAME_PATTERN.match(self.name):
            raise CommandRegistrationError(
                f"Invalid command name {self.name!r}: use 1-32 lowercase "
                "letters, digits or underscores"
            )
        if self.cooldown < 0:
            raise CommandRegistrationError(
                f"Command {self.name!r} has a negative cooldown"
            )
        seen = set()
        for child in self.children:
            child_name = child.descriptor.name
            if child_name in seen:
                raise CommandRegistrationError(
                    f"Command {self.name!r} has duplicate child {child_name!r}"
                )
            seen.add(child_name)

    def find_child(self, name: str) -> Optional[Command]:
        for child in self.children:
            if child.descriptor.name == name:
                return child
        return None


def is_allowed(descriptor: CommandDescriptor, channel_id: int) -> bool:
    if descriptor.allowed_channels is None:
        return True
    return channel_id in descriptor.allowed_channels


CommandHandler = Callable[[Invocation, "CommandClient"], Awaitable[None] | None]


class SlashCommand:
    """Command backed by a plain handler function."""

    def __init__(self, descriptor: CommandDescriptor, handler: CommandHandler) -> None:
        self.descriptor = descriptor
        self._handler = handler

    @property
    def name(self) -> str:
        return self.descriptor.name

    async def execute(self, invocation: Invocation, client: "CommandClient") -> None:
        result = self._handler(invocation, client)
        if inspect.isawaitable(result):
            await result

    def add_child(self, child: Command) -> Command:
        self.descriptor = replace(
            self.descriptor, children=self.descriptor.children + (child,)
        )
        return child

    def child(
        self, name: str, help: str = "no help available", **fields: Any
    ) -> Callable[[CommandHandler], "SlashCommand"]:
        """Register the decorated handler as a subcommand of this command."""

        def decorator(handler: CommandHandler) -> SlashCommand:
            command = slash_command(name, help, **fields)(handler)
            self.add_child(command)
            return command

        return decorator

    def __repr__(self) -> str:
        return f"SlashCommand(name={self.descriptor.name!r})"


def slash_command(
    name: str,
    help: str = "no help available",
    *,
    options: Iterable[OptionSpec] = (),
    user_permissions: Iterable[Permission] = (),
    bot_permissions: Iterable[Permission] = (),
    allowed_channels: Optional[Iterable[int]] = None,
    **fields: Any,
) -> Callable[[CommandHandler], SlashCommand]:

    def decorator(handler: CommandHandler) -> SlashCommand:
        descriptor = CommandDescriptor(
            name=name,
            help=help,
            options=tuple(options),
            user_permissions=tuple(user_permissions),
            bot_permissions=tuple(bot_permissions),
            allowed_channels=(
                frozenset(allowed_channels) if allowed_channels is not None else None
            ),
            **fields,
        )
        return SlashCommand(descriptor, handler)

    return decorator


__all__ = [
    "Command",
    "CommandDescriptor",
    "CommandHandler",
    "OptionSpec",
    "OptionType",
    "SlashCommand",
    "is_allowed",
    "slash_command",
]
