"""User visible texts produced when a guard rejects a command."""

from __future__ import annotations

from slashbot.domain.permissions import Permission

CHANNEL_NOT_ALLOWED = "That command cannot be used in this channel!"

USER_MISSING_PERMISSION = "{error} You must have the {permission} permission in this {location} to use that!"
BOT_MISSING_PERMISSION = "{error} I need the {permission} permission in this {location}!"


def missing_role(error: str, role: str) -> str:
    return f"{error} You must have a role called `{role}` to use that!"


def user_missing_permission(error: str, permission: Permission, location: str) -> str:
    return USER_MISSING_PERMISSION.format(
        error=error, permission=permission.display_name, location=location
    )


def bot_missing_permission(error: str, permission: Permission, location: str) -> str:
    return BOT_MISSING_PERMISSION.format(
        error=error, permission=permission.display_name, location=location
    )


def not_in_voice_channel(error: str) -> str:
    return f"{error} You must be in a voice channel to use that!"


def direct_messages_not_allowed(error: str) -> str:
    return f"{error} This command cannot be used in direct messages"


def invalid_options(error: str, details: str) -> str:
    return f"{error} {details}"


__all__ = [
    "CHANNEL_NOT_ALLOWED",
    "bot_missing_permission",
    "direct_messages_not_allowed",
    "invalid_options",
    "missing_role",
    "not_in_voice_channel",
    "user_missing_permission",
]
