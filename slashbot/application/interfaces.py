"""Protocol interfaces for the collaborators the dispatcher calls into."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Protocol

from slashbot.domain.invocation import Invocation

if TYPE_CHECKING:  # pragma: no cover - typing only
    from slashbot.domain.commands import Command


class Responder(Protocol):
    """Reply channel back to the invoking user."""

    async def reply(self, text: str) -> None: ...

    async def reply_ephemeral(self, text: str) -> None: ...


class CooldownStore(Protocol):
    """Shared cooldown state; implementations must be safe for concurrent use."""

    def remaining(self, key: str) -> int: ...

    def apply(self, key: str, seconds: int) -> None: ...


class CommandListener(Protocol):
    """Observer of dispatch outcomes.

    Methods may return ``None`` or an awaitable; the dispatcher awaits the
    latter. Return values are otherwise ignored.
    """

    def on_terminated(
        self, invocation: Invocation, command: "Command"
    ) -> Awaitable[Any] | None: ...

    def on_completed(
        self, invocation: Invocation, command: "Command"
    ) -> Awaitable[Any] | None: ...

    def on_exception(
        self, invocation: Invocation, command: "Command", error: BaseException
    ) -> Awaitable[Any] | None: ...


__all__ = ["CommandListener", "CooldownStore", "Responder"]
