"""Translate Telegram updates into dispatcher invocations."""

from __future__ import annotations

import logging
from typing import Any, FrozenSet, Mapping, Optional, Tuple

from telegram import Chat, ChatMember, Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from slashbot.domain.invocation import ChannelKind, Invocation, MemberInfo
from slashbot.domain.permissions import Permission

logger = logging.getLogger(__name__)

_CHAT_KINDS = {
    Chat.PRIVATE: ChannelKind.PRIVATE,
    Chat.GROUP: ChannelKind.TEXT,
    Chat.SUPERGROUP: ChannelKind.TEXT,
    Chat.CHANNEL: ChannelKind.NEWS,
}

_MEMBER_DEFAULTS = frozenset(
    {
        Permission.MESSAGE_READ,
        Permission.MESSAGE_WRITE,
        Permission.MESSAGE_EMBED_LINKS,
        Permission.MESSAGE_ATTACH_FILES,
        Permission.VOICE_CONNECT,
        Permission.VOICE_SPEAK,
    }
)

# Administrator right -> permissions it grants.
_ADMIN_RIGHTS = {
    "can_change_info": (Permission.MANAGE_SERVER,),
    "can_promote_members": (Permission.MANAGE_ROLES,),
    "can_restrict_members": (Permission.KICK_MEMBERS, Permission.BAN_MEMBERS),
    "can_invite_users": (Permission.CREATE_INSTANT_INVITE,),
    "can_delete_messages": (Permission.MESSAGE_MANAGE,),
    "can_pin_messages": (Permission.MESSAGE_PIN,),
    "can_manage_topics": (Permission.MANAGE_CHANNEL,),
    "can_manage_video_chats": (Permission.VOICE_MUTE_OTHERS,),
}

# Restricted member flag -> permission it keeps.
_RESTRICTED_RIGHTS = {
    "can_send_messages": Permission.MESSAGE_WRITE,
    "can_add_web_page_previews": Permission.MESSAGE_EMBED_LINKS,
    "can_send_documents": Permission.MESSAGE_ATTACH_FILES,
    "can_pin_messages": Permission.MESSAGE_PIN,
    "can_invite_users": Permission.CREATE_INSTANT_INVITE,
}


class TelegramResponder:
    """Replies visible to the caller; alerts for button presses.

    Telegram has no ephemeral messages, so callback queries get a modal
    alert and commands get a reply to the triggering message.
    """

    def __init__(self, update: Update) -> None:
        self._update = update

    async def reply(self, text: str) -> None:
        await self._send(text, alert=False)

    async def reply_ephemeral(self, text: str) -> None:
        await self._send(text, alert=True)

    async def _send(self, text: str, *, alert: bool) -> None:
        update = self._update
        if getattr(update, "message", None):
            await update.message.reply_text(text)
        elif getattr(update, "callback_query", None):
            await update.callback_query.answer(text, show_alert=alert)
        else:
            logger.debug("No reply target for update %s", update.update_id)


def channel_kind_for(chat: Optional[Chat]) -> ChannelKind:
    if chat is None:
        return ChannelKind.UNKNOWN
    return _CHAT_KINDS.get(chat.type, ChannelKind.UNKNOWN)


def permissions_for(member: ChatMember) -> FrozenSet[Permission]:
    status = member.status
    if status == ChatMember.OWNER:
        return frozenset({Permission.ADMINISTRATOR})
    if status == ChatMember.ADMINISTRATOR:
        granted = set(_MEMBER_DEFAULTS)
        for flag, permissions in _ADMIN_RIGHTS.items():
            if getattr(member, flag, False):
                granted.update(permissions)
        return frozenset(granted)
    if status == ChatMember.MEMBER:
        return _MEMBER_DEFAULTS
    if status == ChatMember.RESTRICTED:
        granted = {Permission.MESSAGE_READ}
        for flag, permission in _RESTRICTED_RIGHTS.items():
            if getattr(member, flag, False):
                granted.add(permission)
        return frozenset(granted)
    return frozenset()


def roles_for(member: ChatMember) -> Tuple[str, ...]:
    roles = [member.status]
    custom_title = getattr(member, "custom_title", None)
    if custom_title:
        roles.append(custom_title)
    return tuple(roles)


def member_info(member: ChatMember) -> MemberInfo:
    return MemberInfo(
        user_id=member.user.id,
        roles=roles_for(member),
        permissions=permissions_for(member),
    )


async def _fetch_member(
    context: ContextTypes.DEFAULT_TYPE, chat_id: int, user_id: int
) -> Optional[MemberInfo]:
    try:
        member = await context.bot.get_chat_member(chat_id, user_id)
    except TelegramError as exc:
        logger.warning(
            "Could not resolve member %s in chat %s: %s", user_id, chat_id, exc
        )
        return None
    return member_info(member)


async def build_invocation(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    command_path: str,
    *,
    options: Mapping[str, Any] | None = None,
    raw_args: Tuple[str, ...] = (),
    shard_id: int = 0,
) -> Invocation:
    """Build an :class:`Invocation` for ``command_path`` from a Telegram update.

    Group chats resolve both the caller's and the bot's membership, which
    costs two ``getChatMember`` calls. Private chats resolve neither.
    """

    user = update.effective_user
    chat = update.effective_chat
    kind = channel_kind_for(chat)
    chat_id = chat.id if chat is not None else 0
    user_id = user.id if user is not None else chat_id

    group_id = None
    member = self_member = None
    if kind is ChannelKind.TEXT:
        group_id = chat_id
        member = await _fetch_member(context, chat_id, user_id)
        self_member = await _fetch_member(context, chat_id, context.bot.id)

    return Invocation(
        command_path=command_path,
        user_id=user_id,
        channel_id=chat_id,
        channel_kind=kind,
        responder=TelegramResponder(update),
        group_id=group_id,
        shard_id=shard_id,
        member=member,
        self_member=self_member,
        options=options or {},
        raw_args=raw_args,
    )


__all__ = [
    "TelegramResponder",
    "build_invocation",
    "channel_kind_for",
    "member_info",
    "permissions_for",
    "roles_for",
]
