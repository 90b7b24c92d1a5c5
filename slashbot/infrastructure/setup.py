from typing import Optional

from ..application.client import CommandClient
from ..application.interfaces import CommandListener, CooldownStore
from ..application.listeners import (
    CompositeListener,
    EventPublishingListener,
    LoggingListener,
)
from ..core.config import BotConfig, ConfigProvider, get_config_provider
from ..core.container import Container, get_container, set_container
from ..core.events import EventBus
from .cooldown_store import InMemoryCooldownStore


def setup_container(provider: Optional[ConfigProvider] = None) -> Container:
    """Create and populate the dependency container for one bot process."""
    container = Container()
    set_container(container)

    config_provider = provider or get_config_provider()
    config = config_provider.get()
    container.register_singleton(ConfigProvider, config_provider)
    container.register_singleton(BotConfig, config)

    event_bus = EventBus()
    container.register_singleton(EventBus, event_bus)

    cooldowns = InMemoryCooldownStore()
    container.register_singleton(CooldownStore, cooldowns)

    listener = CompositeListener(
        [LoggingListener(), EventPublishingListener(event_bus)]
    )
    container.register_singleton(CommandListener, listener)

    container.register_factory(
        CommandClient,
        lambda: CommandClient.from_config(
            config, cooldowns=cooldowns, listener=listener
        ),
    )
    return container


def get_command_client() -> CommandClient:

    return get_container().get(CommandClient)


def get_event_bus() -> EventBus:

    return get_container().get(EventBus)


def get_cooldown_store() -> CooldownStore:

    return get_container().get(CooldownStore)
