import logging
from contextvars import ContextVar
from typing import Any, Callable, Dict, Optional, Type, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Container:
    """Registry of shared services keyed by their interface type."""

    def __init__(self) -> None:
        self._singletons: Dict[type, Any] = {}
        self._factories: Dict[type, Callable[[], Any]] = {}

    def register_singleton(self, interface: Type[T], implementation: T) -> None:

        self._singletons[interface] = implementation

    def register_factory(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """Register a factory resolved once, on first lookup."""

        self._factories[interface] = factory

    def get(self, interface: Type[T]) -> T:

        if interface in self._singletons:
            return self._singletons[interface]

        factory = self._factories.pop(interface, None)
        if factory is not None:
            instance = factory()
            self._singletons[interface] = instance
            logger.debug("Resolved %s from factory", interface.__name__)
            return instance

        raise ValueError(f"Service {interface.__name__} not registered in container")

    def try_get(self, interface: Type[T]) -> Optional[T]:

        try:
            return self.get(interface)
        except ValueError:
            return None

    def __contains__(self, interface: type) -> bool:
        return interface in self._singletons or interface in self._factories

    def clear(self) -> None:

        self._singletons.clear()
        self._factories.clear()


_current_container: ContextVar[Container | None] = ContextVar(
    "_current_container", default=None
)


def set_container(container: Container) -> None:

    _current_container.set(container)


def get_container() -> Container:

    container = _current_container.get()
    if container is None:
        raise RuntimeError("Dependency container has not been initialised")
    return container


def reset_container() -> None:

    container = _current_container.get()
    if container is not None:
        container.clear()
    _current_container.set(None)
