import logging
from typing import Awaitable, Callable, Iterable, Sequence, Tuple

from telegram import Update
from telegram.ext import ContextTypes

from slashbot.application.client import CommandClient
from slashbot.core.exceptions import ValidationError
from slashbot.domain.commands import OptionSpec, OptionType
from slashbot.handlers.command_types import (
    CommandArgs,
    CommandOptions,
    normalize_command_args,
)
from slashbot.presentation import messages
from slashbot.presentation.telegram.invocation import (
    TelegramResponder,
    build_invocation,
)

logger = logging.getLogger(__name__)

TelegramCallback = Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]]


def resolve_command_path(
    client: CommandClient, path: str, args: CommandArgs
) -> Tuple[str, CommandArgs]:
    """Route ``/parent child ...`` to the child command when one matches."""

    if "/" in path or not args:
        return path, args
    command = client.find_command(path)
    if command is None:
        return path, args
    child = command.descriptor.find_child(args[0].lower())
    if child is None:
        return path, args
    return f"{path}/{child.descriptor.name}", args[1:]


def parse_options(specs: Sequence[OptionSpec], args: Iterable[str]) -> CommandOptions:
    """Map positional arguments onto declared options.

    A trailing string option takes the rest of the line. Surplus arguments
    are ignored; they stay available as ``Invocation.raw_args``.
    """

    remaining = list(args)
    values: CommandOptions = {}
    for index, spec in enumerate(specs):
        if not remaining:
            if spec.required:
                raise ValidationError(f"Missing required option `{spec.name}`")
            continue
        if index == len(specs) - 1 and spec.type is OptionType.STRING:
            raw = " ".join(remaining)
            remaining = []
        else:
            raw = remaining.pop(0)
        values[spec.name] = spec.parse(raw)
    return values


def make_command_callback(
    client: CommandClient, path: str, *, shard_id: int = 0
) -> TelegramCallback:
    """Create the PTB callback that dispatches ``path`` through ``client``."""

    async def callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        args = normalize_command_args(getattr(context, "args", None))
        command_path, args = resolve_command_path(client, path, args)
        command = client.find_command(command_path)
        if command is None:
            logger.warning("Received unknown command %s", command_path)
            return

        try:
            options = parse_options(command.descriptor.options, args)
        except ValidationError as exc:
            logger.info("Rejected options for %s: %s", command_path, exc)
            try:
                await TelegramResponder(update).reply_ephemeral(
                    messages.invalid_options(client.error, str(exc))
                )
            except Exception as send_err:  # pragma: no cover
                logger.debug("Failed to send option error: %s", send_err)
            return

        invocation = await build_invocation(
            update,
            context,
            command_path,
            options=options,
            raw_args=args,
            shard_id=shard_id,
        )
        await client.handle(invocation)

    callback.__name__ = f"{path.replace('/', '_')}_cmd"
    return callback


async def log_handler_error(
    update: object, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """PTB error handler for command errors nobody listened for."""

    logger.error(
        "Unhandled error while processing update %s",
        getattr(update, "update_id", None),
        exc_info=context.error,
    )


__all__ = [
    "log_handler_error",
    "make_command_callback",
    "parse_options",
    "resolve_command_path",
]
