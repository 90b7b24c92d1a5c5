"""Publish registered commands to Telegram's command menu."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from telegram import Bot, BotCommand, BotCommandScopeChat, BotCommandScopeDefault

from slashbot.application.client import CommandClient
from slashbot.application.command_data import CommandData

logger = logging.getLogger(__name__)

# Telegram rejects names and descriptions longer than these.
MAX_COMMAND_LENGTH = 32
MAX_DESCRIPTION_LENGTH = 256


def _describe(text: str) -> str:
    text = text.strip() or "-"
    return text[:MAX_DESCRIPTION_LENGTH]


def child_alias(parent: str, child: str) -> Optional[str]:
    """Return the flat ``parent_child`` command name, or ``None`` if too long."""

    alias = f"{parent}_{child}"
    if len(alias) > MAX_COMMAND_LENGTH:
        return None
    return alias


def build_bot_commands(command_datas: Iterable[CommandData]) -> List[BotCommand]:
    """
    Flatten command data into Telegram menu entries.

    Telegram menus have no nesting, so every subcommand is listed as
    ``parent_child`` after its parent. Subcommands whose flat name would
    exceed :data:`MAX_COMMAND_LENGTH` stay reachable as ``/parent child``
    only.

    Args:
        command_datas: Registration payloads, usually ``client.command_data()``

    Returns:
        List of BotCommand objects in registration order
    """
    commands: List[BotCommand] = []
    for data in command_datas:
        commands.append(BotCommand(data.name, _describe(data.description)))
        for sub in data.subcommands:
            alias = child_alias(data.name, sub.name)
            if alias is None:
                logger.warning(
                    "Menu entry for %s %s skipped: name exceeds %s characters",
                    data.name,
                    sub.name,
                    MAX_COMMAND_LENGTH,
                )
                continue
            commands.append(BotCommand(alias, _describe(sub.description)))
    return commands


def group_by_scope(
    command_datas: Iterable[CommandData],
) -> Dict[Optional[int], List[CommandData]]:
    """Split payloads into global (``None`` key) and per-chat lists."""

    grouped: Dict[Optional[int], List[CommandData]] = defaultdict(list)
    for data in command_datas:
        grouped[data.guild_id].append(data)
    return dict(grouped)


async def publish_commands(bot: Bot, client: CommandClient) -> None:
    """
    Register every command of ``client`` with Telegram.

    Global commands use the default scope. Commands bound to a ``guild_id``
    are registered only for that chat, together with the global ones so the
    chat menu stays complete.
    """
    grouped = group_by_scope(client.command_data())
    global_datas = grouped.pop(None, [])

    try:
        await bot.set_my_commands(
            commands=build_bot_commands(global_datas),
            scope=BotCommandScopeDefault(),
        )
        logger.info("Published %s global commands", len(global_datas))
    except Exception as e:
        logger.exception(f"Failed to publish global commands: {e}")

    for chat_id, datas in grouped.items():
        try:
            await bot.set_my_commands(
                commands=build_bot_commands(global_datas + datas),
                scope=BotCommandScopeChat(chat_id=chat_id),
            )
            logger.info(f"Published {len(datas)} commands for chat {chat_id}")
        except Exception as e:
            logger.exception(f"Failed to publish commands for chat {chat_id}: {e}")
