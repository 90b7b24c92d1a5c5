"""Observability utilities (logging, metrics)."""

from .logging import JsonFormatter, TelegramTokenRedactor, configure_logging
from .metrics import DispatchMetrics, MetricsConfig

__all__ = [
    "configure_logging",
    "DispatchMetrics",
    "JsonFormatter",
    "MetricsConfig",
    "TelegramTokenRedactor",
]
