"""Immutable snapshot of a single command attempt."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, FrozenSet, Mapping, Optional, Tuple

from .permissions import Permission

if TYPE_CHECKING:  # pragma: no cover - typing only
    from slashbot.application.interfaces import Responder


class ChannelKind(Enum):
    TEXT = "text"
    PRIVATE = "private"
    NEWS = "news"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MemberInfo:
    """Roles and permissions of one member inside a group.

    ``channel_permissions`` replaces the group-wide set for the channels it
    lists. ``ADMINISTRATOR`` grants everything.
    """

    user_id: int
    roles: Tuple[str, ...] = ()
    permissions: FrozenSet[Permission] = frozenset()
    channel_permissions: Mapping[int, FrozenSet[Permission]] = field(
        default_factory=dict, hash=False
    )
    voice_channel_id: Optional[int] = None

    def has_permission(
        self, permission: Permission, channel_id: Optional[int] = None
    ) -> bool:
        if Permission.ADMINISTRATOR in self.permissions:
            return True
        granted = self.permissions
        if channel_id is not None and channel_id in self.channel_permissions:
            granted = self.channel_permissions[channel_id]
        return permission in granted

    def has_role(self, name: str) -> bool:
        wanted = name.casefold()
        return any(role.casefold() == wanted for role in self.roles)


@dataclass(frozen=True)
class Invocation:

    command_path: str
    user_id: int
    channel_id: int
    channel_kind: ChannelKind
    responder: "Responder" = field(repr=False, compare=False)
    group_id: Optional[int] = None
    shard_id: int = 0
    member: Optional[MemberInfo] = None
    self_member: Optional[MemberInfo] = None
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)
    raw_args: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def is_text_like(self) -> bool:
        return self.channel_kind is ChannelKind.TEXT

    @property
    def in_group(self) -> bool:
        return self.group_id is not None

    @property
    def command_name(self) -> str:
        return self.command_path.split("/", 1)[0]

    @property
    def subcommand_name(self) -> Optional[str]:
        parts = self.command_path.split("/", 1)
        return parts[1] if len(parts) == 2 else None


__all__ = ["ChannelKind", "Invocation", "MemberInfo"]
