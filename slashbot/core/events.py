"""In-process event bus used to fan dispatch outcomes out to observers."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Type, TypeVar

__all__ = [
    "Event",
    "EventBus",
    "EventHandler",
]

logger = logging.getLogger(__name__)

TEvent = TypeVar("TEvent", bound="Event")

EventHandler = Callable[[TEvent], Awaitable[None] | None]


@dataclass(frozen=True)
class Event:
    """Base type for events dispatched across the application."""

    @property
    def name(self) -> str:
        """Return the canonical name of the event."""

        return type(self).__name__


class EventBus:
    """Simple in-memory asynchronous event bus.

    Handlers registered for a base class also receive every subclass event,
    so subscribing to :class:`Event` observes everything.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[Type[Event], List[EventHandler[Any]]] = {}

    def subscribe(
        self, event_type: Type[TEvent], handler: EventHandler[TEvent]
    ) -> None:
        """Register a handler for the given event type."""

        handlers = self._subscribers.setdefault(event_type, [])
        handlers.append(handler)  # type: ignore[arg-type]

    def unsubscribe(
        self, event_type: Type[TEvent], handler: EventHandler[TEvent]
    ) -> bool:
        """Remove a handler; return ``False`` if it was not registered."""

        handlers = self._subscribers.get(event_type, [])
        try:
            handlers.remove(handler)  # type: ignore[arg-type]
        except ValueError:
            return False
        return True

    async def publish(self, event: Event) -> None:
        """Publish an event to all matching handlers."""

        for registered_type, handlers in list(self._subscribers.items()):
            if not isinstance(event, registered_type):
                continue
            for handler in list(handlers):
                result = handler(event)  # type: ignore[arg-type]
                if inspect.isawaitable(result):
                    await result
        logger.debug("Published %s", event.name)
