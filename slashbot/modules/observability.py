"""Module configuring logging and dispatch metrics."""

from __future__ import annotations

from dataclasses import dataclass

from ..application.events import CommandCompleted, CommandErrored, CommandTerminated
from ..application.interfaces import CooldownStore
from ..core.events import Event, EventBus
from ..observability.logging import configure_logging
from ..observability.metrics import DispatchMetrics, MetricsConfig
from .base import Module, ModuleContext


@dataclass
class ObservabilityModule(Module):
    name: str = "observability"
    order: int = 0

    def setup(self, context: ModuleContext) -> None:  # noqa: D401
        configure_logging(context.config.log_level)

        metrics = DispatchMetrics(
            MetricsConfig(
                host=context.config.metrics_host,
                port=context.config.metrics_port,
            )
        )
        context.container.register_singleton(DispatchMetrics, metrics)

        context.on_startup(metrics.start_server)
        context.on_shutdown(metrics.stop_server)

        cooldowns = context.container.try_get(CooldownStore)
        if cooldowns is not None and hasattr(cooldowns, "__len__"):
            metrics.sample(metrics.active_cooldowns, lambda: len(cooldowns))  # type: ignore[arg-type]

        event_bus: EventBus = context.event_bus

        async def _record_event(event: Event) -> None:
            metrics.events_total.inc(event=event.name)

        async def _on_terminated(event: CommandTerminated) -> None:
            metrics.commands_total.inc(command=event.command, outcome="terminated")

        async def _on_completed(event: CommandCompleted) -> None:
            metrics.commands_total.inc(command=event.command, outcome="completed")

        async def _on_errored(event: CommandErrored) -> None:
            metrics.commands_total.inc(command=event.command, outcome="errored")

        event_bus.subscribe(Event, _record_event)
        event_bus.subscribe(CommandTerminated, _on_terminated)
        event_bus.subscribe(CommandCompleted, _on_completed)
        event_bus.subscribe(CommandErrored, _on_errored)
