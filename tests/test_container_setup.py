import pytest

from slashbot.application.client import CommandClient
from slashbot.application.events import CommandCompleted
from slashbot.application.interfaces import CommandListener, CooldownStore
from slashbot.application.listeners import CompositeListener
from slashbot.core.config import BotConfig, ConfigProvider, StaticConfigProvider
from slashbot.core.container import (
    Container,
    get_container,
    reset_container,
    set_container,
)
from slashbot.core.events import EventBus
from slashbot.domain.commands import slash_command
from slashbot.domain.invocation import ChannelKind, Invocation
from slashbot.infrastructure.cooldown_store import InMemoryCooldownStore
from slashbot.infrastructure.setup import (
    get_command_client,
    get_cooldown_store,
    get_event_bus,
    setup_container,
)


@pytest.fixture
def sample_config() -> BotConfig:
    return BotConfig(
        token="test-token",
        owner_id=1,
        co_owner_ids=[2],
        success_emoji="s",
        warning_emoji="w",
        error_emoji="e",
    )


class TestContainer:

    def test_singleton(self):
        container = Container()
        bus = EventBus()
        container.register_singleton(EventBus, bus)

        assert container.get(EventBus) is bus
        assert EventBus in container

    def test_factory_resolved_once(self):
        container = Container()
        calls = []

        def factory():
            calls.append(1)
            return EventBus()

        container.register_factory(EventBus, factory)

        assert container.get(EventBus) is container.get(EventBus)
        assert calls == [1]

    def test_missing_service(self):
        container = Container()

        with pytest.raises(ValueError, match="EventBus"):
            container.get(EventBus)
        assert container.try_get(EventBus) is None

    def test_clear(self):
        container = Container()
        container.register_singleton(EventBus, EventBus())
        container.clear()

        assert EventBus not in container

    def test_reset_container(self):
        set_container(Container())
        reset_container()

        with pytest.raises(RuntimeError):
            get_container()


def test_setup_container_wires_services(sample_config: BotConfig) -> None:
    provider = StaticConfigProvider(sample_config)

    container = setup_container(provider)

    assert get_container() is container
    assert container.get(ConfigProvider) is provider
    assert container.get(BotConfig) is sample_config
    assert isinstance(get_cooldown_store(), InMemoryCooldownStore)
    assert container.get(CooldownStore) is get_cooldown_store()
    assert isinstance(container.get(CommandListener), CompositeListener)

    client = get_command_client()
    assert isinstance(client, CommandClient)
    assert client is container.get(CommandClient)
    assert client.owner_id == 1
    assert client.co_owner_ids == (2,)
    assert client.success == "s"
    assert client.cooldowns is get_cooldown_store()
    assert client.listener is container.get(CommandListener)
    assert get_event_bus() is container.get(EventBus)


@pytest.mark.asyncio
async def test_setup_container_publishes_dispatch_events(
    sample_config: BotConfig, responder
) -> None:

    setup_container(StaticConfigProvider(sample_config))
    seen = []
    get_event_bus().subscribe(CommandCompleted, seen.append)
    client = get_command_client()
    client.add_command(
        slash_command("ping", guild_only=False)(lambda invocation, c: None)
    )

    await client.handle(
        Invocation(
            command_path="ping",
            user_id=5,
            channel_id=5,
            channel_kind=ChannelKind.PRIVATE,
            responder=responder,
        )
    )

    assert seen == [
        CommandCompleted(command="ping", user_id=5, channel_id=5, group_id=None)
    ]
