"""High-level lifecycle events used across modules."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.events import Event


@dataclass(frozen=True)
class BotStarted(Event):
    version: str


@dataclass(frozen=True)
class CommandsPublished(Event):
    count: int
