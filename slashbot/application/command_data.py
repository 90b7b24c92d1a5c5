"""Registration payloads derived from command descriptors."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from slashbot.domain.commands import CommandDescriptor, OptionSpec


class SubcommandData(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    options: List[OptionSpec] = Field(default_factory=list)


class CommandData(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    options: List[OptionSpec] = Field(default_factory=list)
    subcommands: List[SubcommandData] = Field(default_factory=list)
    guild_id: Optional[int] = None


def build_command_data(descriptor: CommandDescriptor) -> CommandData:
    """Build the registrable structure for ``descriptor`` and its children."""

    subcommands = [
        SubcommandData(
            name=child.descriptor.name,
            description=child.descriptor.help,
            options=list(child.descriptor.options),
        )
        for child in descriptor.children
    ]
    return CommandData(
        name=descriptor.name,
        description=descriptor.help,
        options=list(descriptor.options),
        subcommands=subcommands,
        guild_id=descriptor.guild_id,
    )


__all__ = ["CommandData", "SubcommandData", "build_command_data"]
