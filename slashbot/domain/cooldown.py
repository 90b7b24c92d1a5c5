"""Cooldown scopes and the key/message derivation built on them."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .invocation import Invocation


class CooldownScope(Enum):
    """Dimensions a cooldown is keyed on.

    Group based scopes fall back to their channel based counterpart when the
    invocation happens outside a group (private chats).
    """

    USER = ("U:%d", "")
    USER_GUILD = ("U:%d|G:%d", "in this server")
    USER_CHANNEL = ("U:%d|C:%d", "in this channel")
    GUILD = ("G:%d", "in this server")
    CHANNEL = ("C:%d", "in this channel")
    SHARD = ("S:%d", "on this shard")
    USER_SHARD = ("U:%d|S:%d", "on this shard")
    GLOBAL = ("Global", "globally")

    def __init__(self, key_format: str, error_specification: str) -> None:
        self.key_format = key_format
        self.error_specification = error_specification

    @property
    def fallback(self) -> Optional["CooldownScope"]:
        return _FALLBACKS.get(self)

    def gen_key(self, name: str, *ids: int) -> str:
        if self is CooldownScope.GLOBAL:
            return f"{name}|{self.key_format}"
        return f"{name}|{self.key_format % ids}"


_FALLBACKS = {
    CooldownScope.USER_GUILD: CooldownScope.USER_CHANNEL,
    CooldownScope.GUILD: CooldownScope.CHANNEL,
}


def effective_scope(scope: CooldownScope, invocation: Invocation) -> CooldownScope:
    if scope.fallback is not None and not invocation.in_group:
        return scope.fallback
    return scope


def cooldown_key(name: str, scope: CooldownScope, invocation: Invocation) -> str:
    scope = effective_scope(scope, invocation)
    user_id = invocation.user_id
    if scope is CooldownScope.USER:
        return scope.gen_key(name, user_id)
    if scope is CooldownScope.USER_GUILD:
        return scope.gen_key(name, user_id, invocation.group_id)
    if scope is CooldownScope.USER_CHANNEL:
        return scope.gen_key(name, user_id, invocation.channel_id)
    if scope is CooldownScope.GUILD:
        return scope.gen_key(name, invocation.group_id)
    if scope is CooldownScope.CHANNEL:
        return scope.gen_key(name, invocation.channel_id)
    if scope is CooldownScope.SHARD:
        return scope.gen_key(name, invocation.shard_id)
    if scope is CooldownScope.USER_SHARD:
        return scope.gen_key(name, user_id, invocation.shard_id)
    return scope.gen_key(name, 0)


def cooldown_error(
    scope: CooldownScope, invocation: Invocation, remaining: int, warning: str
) -> Optional[str]:
    if remaining <= 0:
        return None
    front = f"{warning} That command is on cooldown for {remaining} more seconds"
    if scope is CooldownScope.USER:
        return front + "!"
    return f"{front} {effective_scope(scope, invocation).error_specification}!"


__all__ = ["CooldownScope", "cooldown_error", "cooldown_key", "effective_scope"]
