from slashbot.application.command_data import (
    CommandData,
    SubcommandData,
    build_command_data,
)
from slashbot.domain.commands import (
    CommandDescriptor,
    OptionSpec,
    OptionType,
    slash_command,
)


def test_bare_command_has_empty_lists():
    data = build_command_data(CommandDescriptor(name="ping", help="Pong"))

    assert data.name == "ping"
    assert data.description == "Pong"
    assert data.options == []
    assert data.subcommands == []
    assert data.guild_id is None


def test_options_and_children_use_their_own_options():
    amount = OptionSpec(name="amount", description="How many", type=OptionType.INTEGER)
    text = OptionSpec(name="text", description="Tag text", required=True)

    @slash_command("tag", "Manage tags", options=[amount], guild_id=55)
    async def tag(invocation, client):
        return None

    @tag.child("create", "Create a tag", options=[text])
    async def create(invocation, client):
        return None

    @tag.child("list", "List tags")
    async def list_tags(invocation, client):
        return None

    data = build_command_data(tag.descriptor)

    assert data.options == [amount]
    assert data.guild_id == 55
    assert data.subcommands == [
        SubcommandData(name="create", description="Create a tag", options=[text]),
        SubcommandData(name="list", description="List tags", options=[]),
    ]


def test_build_is_pure_and_repeatable():
    @slash_command("tag", "Manage tags")
    async def tag(invocation, client):
        return None

    tag.child("create", "Create a tag")(lambda invocation, client: None)

    first = build_command_data(tag.descriptor)
    second = build_command_data(tag.descriptor)

    assert first == second
    assert first is not second
    assert first.model_dump() == second.model_dump()
    assert len(tag.descriptor.children) == 1


def test_model_dump_shape():
    data = build_command_data(CommandDescriptor(name="ping", help="Pong"))

    assert isinstance(data, CommandData)
    assert data.model_dump() == {
        "name": "ping",
        "description": "Pong",
        "options": [],
        "subcommands": [],
        "guild_id": None,
    }
