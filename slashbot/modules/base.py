"""Core abstractions for modular bot composition."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Protocol

from telegram.ext import Application

from ..application.client import CommandClient
from ..core.config import BotConfig
from ..core.container import Container
from ..core.events import EventBus
from ..core.exceptions import ConfigurationError
from ..observability.metrics import DispatchMetrics

logger = logging.getLogger(__name__)

LifecycleHook = Callable[[], Awaitable[None] | None]


@dataclass
class ModuleContext:
    """Everything a module may touch while wiring itself into the bot."""

    application: Application
    container: Container
    config: BotConfig
    event_bus: EventBus
    _register_startup: Callable[[LifecycleHook], None]
    _register_shutdown: Callable[[LifecycleHook], None]

    def on_startup(self, hook: LifecycleHook) -> None:
        self._register_startup(hook)

    def on_shutdown(self, hook: LifecycleHook) -> None:
        self._register_shutdown(hook)

    @property
    def client(self) -> CommandClient:
        return self.container.get(CommandClient)

    @property
    def metrics(self) -> DispatchMetrics:
        return self.container.get(DispatchMetrics)


class Module(Protocol):
    name: str
    order: int

    def setup(self, context: ModuleContext) -> None: ...


async def _call(hook: LifecycleHook) -> None:
    result = hook()
    if inspect.isawaitable(result):
        await result


class ModuleLoader:
    """Sets modules up by ascending ``order`` and runs their lifecycle hooks.

    Startup hooks run in registration order and stop at the first failure.
    Shutdown hooks run in reverse order; a failing hook is logged and the
    remaining hooks still run.
    """

    def __init__(self, modules: Iterable[Module]) -> None:
        ordered = sorted(modules, key=lambda module: module.order)
        names = [module.name for module in ordered]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Duplicate module names: {', '.join(duplicates)}"
            )
        self._modules = ordered
        self._startup_hooks: List[LifecycleHook] = []
        self._shutdown_hooks: List[LifecycleHook] = []

    @property
    def modules(self) -> List[Module]:
        return list(self._modules)

    def setup(self, context: ModuleContext) -> None:
        for module in self._modules:
            logger.debug("Setting up module %s (order %s)", module.name, module.order)
            module.setup(context)
        logger.info("Loaded modules: %s", ", ".join(m.name for m in self._modules))

    def register_startup(self, hook: LifecycleHook) -> None:
        self._startup_hooks.append(hook)

    def register_shutdown(self, hook: LifecycleHook) -> None:
        self._shutdown_hooks.append(hook)

    async def run_startup(self) -> None:
        for hook in self._startup_hooks:
            await _call(hook)

    async def run_shutdown(self) -> None:
        for hook in reversed(self._shutdown_hooks):
            try:
                await _call(hook)
            except Exception:
                logger.exception(
                    "Shutdown hook %s failed", getattr(hook, "__name__", hook)
                )
