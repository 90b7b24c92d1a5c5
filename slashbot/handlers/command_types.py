"""Type helpers for Telegram command handlers."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple, TypeAlias

CommandArgs: TypeAlias = Tuple[str, ...]
CommandOptions: TypeAlias = Dict[str, Any]


def normalize_command_args(raw_args: Iterable[object] | None) -> CommandArgs:
    """Convert raw command arguments into a tuple of non-empty strings."""

    if not raw_args:
        return ()

    normalized: list[str] = []
    for value in raw_args:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            normalized.append(text)
    return tuple(normalized)


__all__ = ["CommandArgs", "CommandOptions", "normalize_command_args"]
