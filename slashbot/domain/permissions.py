from __future__ import annotations

from enum import Enum


class PermissionScope(Enum):
    SERVER = "server"
    CHANNEL = "channel"
    VOICE = "voice"


class Permission(Enum):
    ADMINISTRATOR = ("Administrator", PermissionScope.SERVER)
    MANAGE_SERVER = ("Manage Server", PermissionScope.SERVER)
    MANAGE_ROLES = ("Manage Roles", PermissionScope.SERVER)
    KICK_MEMBERS = ("Kick Members", PermissionScope.SERVER)
    BAN_MEMBERS = ("Ban Members", PermissionScope.SERVER)
    CREATE_INSTANT_INVITE = ("Create Instant Invite", PermissionScope.CHANNEL)
    MANAGE_CHANNEL = ("Manage Channels", PermissionScope.CHANNEL)
    MESSAGE_READ = ("Read Messages", PermissionScope.CHANNEL)
    MESSAGE_WRITE = ("Send Messages", PermissionScope.CHANNEL)
    MESSAGE_MANAGE = ("Manage Messages", PermissionScope.CHANNEL)
    MESSAGE_PIN = ("Pin Messages", PermissionScope.CHANNEL)
    MESSAGE_EMBED_LINKS = ("Embed Links", PermissionScope.CHANNEL)
    MESSAGE_ATTACH_FILES = ("Attach Files", PermissionScope.CHANNEL)
    VOICE_CONNECT = ("Connect", PermissionScope.VOICE)
    VOICE_SPEAK = ("Speak", PermissionScope.VOICE)
    VOICE_MUTE_OTHERS = ("Mute Members", PermissionScope.VOICE)

    def __init__(self, display_name: str, scope: PermissionScope) -> None:
        self.display_name = display_name
        self.scope = scope

    @property
    def is_channel(self) -> bool:
        """Voice permissions are channel permissions on a voice channel."""

        return self.scope is not PermissionScope.SERVER

    @property
    def is_voice(self) -> bool:
        return self.scope is PermissionScope.VOICE


__all__ = ["Permission", "PermissionScope"]
