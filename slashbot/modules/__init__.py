"""Bot composition modules."""

from .base import Module, ModuleContext, ModuleLoader
from .command_module import CommandModule, handler_routes
from .events import BotStarted, CommandsPublished
from .observability import ObservabilityModule

__all__ = [
    "Module",
    "ModuleContext",
    "ModuleLoader",
    "CommandModule",
    "ObservabilityModule",
    "BotStarted",
    "CommandsPublished",
    "handler_routes",
]
