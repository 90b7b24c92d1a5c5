from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import Chat

from slashbot.core.exceptions import ValidationError
from slashbot.domain.commands import OptionSpec, OptionType, slash_command
from slashbot.handlers.command_types import normalize_command_args
from slashbot.handlers.commands import (
    log_handler_error,
    make_command_callback,
    parse_options,
    resolve_command_path,
)

AMOUNT = OptionSpec(
    name="amount", description="How many", type=OptionType.INTEGER, required=True
)
REASON = OptionSpec(name="reason", description="Why")


def _private_update(user_id=100):
    update = MagicMock()
    update.effective_chat = SimpleNamespace(id=user_id, type=Chat.PRIVATE)
    update.effective_user = SimpleNamespace(id=user_id)
    update.message.reply_text = AsyncMock()
    return update


def _context(*args):
    context = MagicMock()
    context.args = list(args)
    return context


@pytest.fixture
def tag_client(client):
    recorded = []

    @slash_command("tag", "Manage tags", guild_only=False)
    async def tag(invocation, command_client):
        recorded.append(invocation)

    @tag.child("create", "Create a tag", guild_only=False, options=[REASON])
    async def create(invocation, command_client):
        recorded.append(invocation)

    @slash_command("purge", "Purge messages", guild_only=False, options=[AMOUNT, REASON])
    async def purge(invocation, command_client):
        recorded.append(invocation)

    client.add_commands([tag, purge])
    client.recorded = recorded
    return client


def test_normalize_command_args():
    assert normalize_command_args(None) == ()
    assert normalize_command_args(["  a ", "", None, 3]) == ("a", "3")


class TestResolveCommandPath:

    def test_first_argument_selects_child(self, tag_client):
        assert resolve_command_path(tag_client, "tag", ("Create", "x")) == (
            "tag/create",
            ("x",),
        )

    def test_unknown_child_stays_on_parent(self, tag_client):
        assert resolve_command_path(tag_client, "tag", ("delete",)) == (
            "tag",
            ("delete",),
        )

    def test_explicit_path_is_kept(self, tag_client):
        assert resolve_command_path(tag_client, "tag/create", ("create",)) == (
            "tag/create",
            ("create",),
        )


class TestParseOptions:

    def test_trailing_string_takes_rest(self):
        assert parse_options([AMOUNT, REASON], ("5", "too", "noisy")) == {
            "amount": 5,
            "reason": "too noisy",
        }

    def test_optional_may_be_missing(self):
        assert parse_options([AMOUNT, REASON], ("5",)) == {"amount": 5}

    def test_required_missing(self):
        with pytest.raises(ValidationError, match="amount"):
            parse_options([AMOUNT, REASON], ())

    def test_bad_value(self):
        with pytest.raises(ValidationError):
            parse_options([AMOUNT], ("lots",))


class TestCommandCallback:

    @pytest.mark.asyncio
    async def test_dispatches_subcommand(self, tag_client):
        callback = make_command_callback(tag_client, "tag", shard_id=3)
        update = _private_update()

        await callback(update, _context("create", "hello", "world"))

        [invocation] = tag_client.recorded
        assert invocation.command_path == "tag/create"
        assert invocation.options == {"reason": "hello world"}
        assert invocation.raw_args == ("hello", "world")
        assert invocation.shard_id == 3
        assert callback.__name__ == "tag_cmd"

    @pytest.mark.asyncio
    async def test_flat_route_name(self, tag_client):
        callback = make_command_callback(tag_client, "tag/create")

        await callback(_private_update(), _context())

        assert tag_client.recorded[0].command_path == "tag/create"
        assert callback.__name__ == "tag_create_cmd"

    @pytest.mark.asyncio
    async def test_invalid_options_reply(self, tag_client):
        update = _private_update()

        await make_command_callback(tag_client, "purge")(update, _context("many"))

        assert tag_client.recorded == []
        reply = update.message.reply_text.await_args.args[0]
        assert reply.startswith("ERR Option `amount` expects a integer")

    @pytest.mark.asyncio
    async def test_unknown_command_is_ignored(self, tag_client, caplog):
        update = _private_update()

        await make_command_callback(tag_client, "missing")(update, _context())

        update.message.reply_text.assert_not_called()
        assert "Received unknown command missing" in caplog.text


@pytest.mark.asyncio
async def test_log_handler_error(caplog):
    context = SimpleNamespace(error=RuntimeError("boom"))

    await log_handler_error(SimpleNamespace(update_id=42), context)

    assert "Unhandled error while processing update 42" in caplog.text
    assert "RuntimeError: boom" in caplog.text
