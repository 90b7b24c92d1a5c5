"""Commands every bot instance ships with."""

from __future__ import annotations

from typing import List

from slashbot.application.client import CommandClient
from slashbot.domain.commands import (
    Command,
    OptionSpec,
    OptionType,
    slash_command,
)
from slashbot.domain.cooldown import CooldownScope
from slashbot.domain.invocation import Invocation


@slash_command(
    "ping",
    "Check that the bot is alive",
    guild_only=False,
    cooldown=5,
    cooldown_scope=CooldownScope.USER,
)
async def ping(invocation: Invocation, client: CommandClient) -> None:
    await invocation.responder.reply(f"{client.success} Pong!")


@slash_command(
    "help",
    "List the available commands",
    guild_only=False,
    options=[
        OptionSpec(
            name="command",
            description="Show details for a single command",
            type=OptionType.STRING,
        )
    ],
)
async def help_command(invocation: Invocation, client: CommandClient) -> None:
    wanted = invocation.options.get("command")
    if wanted:
        command = client.find_command(str(wanted).lower().replace(" ", "/"))
        if command is None:
            await invocation.responder.reply(
                f"{client.warning} Unknown command `{wanted}`"
            )
            return
        await invocation.responder.reply(_describe(command))
        return

    lines = [
        _describe(command)
        for command in client.commands
        if not command.descriptor.owner_only or client.is_owner(invocation.user_id)
    ]
    await invocation.responder.reply("\n".join(lines))


def _describe(command: Command) -> str:
    descriptor = command.descriptor
    line = f"/{descriptor.name} - {descriptor.help}"
    children = [
        f"  /{descriptor.name} {child.descriptor.name} - {child.descriptor.help}"
        for child in descriptor.children
    ]
    return "\n".join([line, *children])


@slash_command(
    "cooldown",
    "Inspect or reset command cooldowns",
    owner_only=True,
    guild_only=False,
)
async def cooldown(invocation: Invocation, client: CommandClient) -> None:
    await invocation.responder.reply(
        f"{client.warning} Use /cooldown reset or /cooldown stats"
    )


@cooldown.child(
    "reset", "Clear every active cooldown", owner_only=True, guild_only=False
)
async def cooldown_reset(invocation: Invocation, client: CommandClient) -> None:
    clear = getattr(client.cooldowns, "clear", None)
    if clear is None:
        await invocation.responder.reply(
            f"{client.error} This cooldown store cannot be cleared"
        )
        return
    clear()
    await invocation.responder.reply(f"{client.success} All cooldowns cleared")


@cooldown.child(
    "stats", "Show how many cooldowns are active", owner_only=True, guild_only=False
)
async def cooldown_stats(invocation: Invocation, client: CommandClient) -> None:
    cleanup = getattr(client.cooldowns, "cleanup", None)
    if cleanup is not None:
        cleanup()
    try:
        active = len(client.cooldowns)  # type: ignore[arg-type]
    except TypeError:
        await invocation.responder.reply(
            f"{client.warning} This cooldown store does not report its size"
        )
        return
    await invocation.responder.reply(f"{client.success} {active} active cooldown(s)")


def builtin_commands() -> List[Command]:
    return [ping, help_command, cooldown]


__all__ = ["builtin_commands", "cooldown", "help_command", "ping"]
