"""Events published for every dispatch outcome."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from slashbot.core.events import Event


@dataclass(frozen=True)
class CommandTerminated(Event):
    command: str
    user_id: int
    channel_id: int
    group_id: Optional[int]


@dataclass(frozen=True)
class CommandCompleted(Event):
    command: str
    user_id: int
    channel_id: int
    group_id: Optional[int]


@dataclass(frozen=True)
class CommandErrored(Event):
    command: str
    user_id: int
    channel_id: int
    group_id: Optional[int]
    error: str
