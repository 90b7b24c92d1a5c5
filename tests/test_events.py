from dataclasses import dataclass

import pytest

from slashbot.application.events import CommandErrored
from slashbot.core.events import Event, EventBus


@dataclass(frozen=True)
class _SampleEvent(Event):
    payload: str


@pytest.mark.asyncio
async def test_event_bus_supports_async_and_sync_handlers() -> None:
    bus = EventBus()
    events: list[str] = []

    async def async_handler(event: _SampleEvent) -> None:
        events.append(f"async:{event.payload}")

    def sync_handler(event: _SampleEvent) -> None:
        events.append(f"sync:{event.payload}")

    bus.subscribe(_SampleEvent, async_handler)
    bus.subscribe(_SampleEvent, sync_handler)

    await bus.publish(_SampleEvent("ping"))

    assert events == ["async:ping", "sync:ping"]


@pytest.mark.asyncio
async def test_base_class_subscribers_see_every_event() -> None:
    bus = EventBus()
    names: list[str] = []
    bus.subscribe(Event, lambda event: names.append(event.name))

    await bus.publish(_SampleEvent("a"))
    await bus.publish(
        CommandErrored(
            command="ping", user_id=1, channel_id=1, group_id=None, error="boom"
        )
    )

    assert names == ["_SampleEvent", "CommandErrored"]


@pytest.mark.asyncio
async def test_unsubscribe() -> None:
    bus = EventBus()
    events: list[str] = []

    def handler(event: _SampleEvent) -> None:
        events.append(event.payload)

    bus.subscribe(_SampleEvent, handler)
    assert bus.unsubscribe(_SampleEvent, handler) is True
    assert bus.unsubscribe(_SampleEvent, handler) is False

    await bus.publish(_SampleEvent("ignored"))

    assert events == []
