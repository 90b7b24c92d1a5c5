"""Telegram-specific presentation adapters."""

from .command_menu import build_bot_commands, group_by_scope, publish_commands
from .invocation import TelegramResponder, build_invocation

__all__ = [
    "TelegramResponder",
    "build_bot_commands",
    "build_invocation",
    "group_by_scope",
    "publish_commands",
]
