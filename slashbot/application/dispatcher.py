"""Guard chain executed before a command handler runs."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from slashbot.domain.commands import Command, CommandDescriptor, is_allowed
from slashbot.domain.cooldown import cooldown_error, cooldown_key
from slashbot.domain.invocation import Invocation
from slashbot.domain.permissions import Permission
from slashbot.presentation import messages

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .client import CommandClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuardFailure:
    """Why a command was rejected and what, if anything, to tell the user."""

    reason: str
    message: Optional[str] = None


async def _notify(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


class GuardedDispatcher:
    """Runs the guard chain and then the command handler.

    Guards run in a fixed order and the first failure ends the invocation.
    The owner guard rejects silently; every other guard explains itself.
    The client is passed through every call so one command instance can be
    dispatched concurrently.
    """

    async def dispatch(
        self, command: Command, invocation: Invocation, client: "CommandClient"
    ) -> None:
        failure = self.check_guards(command.descriptor, invocation, client)
        if failure is not None:
            logger.debug(
                "Command %s rejected for user %s: %s",
                invocation.command_path,
                invocation.user_id,
                failure.reason,
            )
            await self.terminate(invocation, command, failure.message, client)
            return

        listener = client.listener
        try:
            await command.execute(invocation, client)
        except Exception as exc:
            if listener is None:
                raise
            await _notify(listener.on_exception(invocation, command, exc))
            return

        if listener is not None:
            await _notify(listener.on_completed(invocation, command))

    async def terminate(
        self,
        invocation: Invocation,
        command: Command,
        message: Optional[str],
        client: "CommandClient",
    ) -> None:
        if message is not None:
            try:
                await invocation.responder.reply_ephemeral(message)
            except Exception as exc:
                logger.error(
                    "Failed to send rejection message for %s: %s",
                    invocation.command_path,
                    exc,
                )
        if client.listener is not None:
            await _notify(client.listener.on_terminated(invocation, command))

    def check_guards(
        self,
        descriptor: CommandDescriptor,
        invocation: Invocation,
        client: "CommandClient",
    ) -> Optional[GuardFailure]:
        """Return the first failing guard, applying the cooldown if all pass."""

        if descriptor.owner_only and not client.is_owner(invocation.user_id):
            return GuardFailure("not_owner")

        if invocation.is_text_like and not is_allowed(
            descriptor, invocation.channel_id
        ):
            return GuardFailure("channel_not_allowed", messages.CHANNEL_NOT_ALLOWED)

        if descriptor.required_role is not None:
            member = invocation.member
            if (
                not invocation.is_text_like
                or member is None
                or not member.has_role(descriptor.required_role)
            ):
                return GuardFailure(
                    "missing_role",
                    messages.missing_role(client.error, descriptor.required_role),
                )

        if invocation.is_text_like:
            failure = self._check_user_permissions(descriptor, invocation, client)
            if failure is None:
                failure = self._check_bot_permissions(descriptor, invocation, client)
            if failure is not None:
                return failure
        elif descriptor.guild_only:
            return GuardFailure(
                "direct_message",
                messages.direct_messages_not_allowed(client.error),
            )

        return self._check_cooldown(descriptor, invocation, client)

    def _check_user_permissions(
        self,
        descriptor: CommandDescriptor,
        invocation: Invocation,
        client: "CommandClient",
    ) -> Optional[GuardFailure]:
        member = invocation.member
        for permission in descriptor.user_permissions:
            if permission.is_channel:
                location, channel_id = "channel", invocation.channel_id
            else:
                location, channel_id = "server", None
            if member is None or not member.has_permission(permission, channel_id):
                return GuardFailure(
                    "missing_user_permission",
                    messages.user_missing_permission(
                        client.error, permission, location
                    ),
                )
        return None

    def _check_bot_permissions(
        self,
        descriptor: CommandDescriptor,
        invocation: Invocation,
        client: "CommandClient",
    ) -> Optional[GuardFailure]:
        self_member = invocation.self_member
        for permission in descriptor.bot_permissions:
            channel_id: Optional[int]
            if permission.is_voice:
                member = invocation.member
                channel_id = member.voice_channel_id if member is not None else None
                if channel_id is None:
                    return GuardFailure(
                        "not_in_voice_channel",
                        messages.not_in_voice_channel(client.error),
                    )
                location = "voice channel"
            elif permission.is_channel:
                location, channel_id = "channel", invocation.channel_id
            else:
                location, channel_id = "server", None

            if self_member is None:
                logger.warning(
                    "Bot member unresolved in group %s; treating %s as missing",
                    invocation.group_id,
                    permission.name,
                )
                return self._bot_missing(permission, location, client)
            if not self_member.has_permission(permission, channel_id):
                return self._bot_missing(permission, location, client)
        return None

    @staticmethod
    def _bot_missing(
        permission: Permission, location: str, client: "CommandClient"
    ) -> GuardFailure:
        return GuardFailure(
            "missing_bot_permission",
            messages.bot_missing_permission(client.error, permission, location),
        )

    def _check_cooldown(
        self,
        descriptor: CommandDescriptor,
        invocation: Invocation,
        client: "CommandClient",
    ) -> Optional[GuardFailure]:
        if descriptor.cooldown <= 0 or client.is_owner(invocation.user_id):
            return None

        key = cooldown_key(descriptor.name, descriptor.cooldown_scope, invocation)
        remaining = client.remaining_cooldown(key)
        if remaining > 0:
            return GuardFailure(
                "on_cooldown",
                cooldown_error(
                    descriptor.cooldown_scope, invocation, remaining, client.warning
                ),
            )
        client.apply_cooldown(key, descriptor.cooldown)
        return None


__all__ = ["GuardFailure", "GuardedDispatcher"]
