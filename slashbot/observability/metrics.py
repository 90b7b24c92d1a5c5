"""Dispatch counters exposed in the Prometheus text format."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)

LabelKey = Tuple[Tuple[str, str], ...]

CONTENT_TYPE = "text/plain; version=0.0.4"


def _label_key(labels: Dict[str, str]) -> LabelKey:
    return tuple(sorted((name, str(value)) for name, value in labels.items()))


def _render_labels(key: LabelKey) -> str:
    if not key:
        return ""
    pairs = ",".join(f'{name}="{value}"' for name, value in key)
    return "{" + pairs + "}"


class _Metric:
    kind = "untyped"

    def __init__(self, name: str, description: str) -> None:
        self.name = name
        self.description = description
        self._series: Dict[LabelKey, float] = {}
        self._lock = threading.Lock()

    def value(self, **labels: str) -> float:
        with self._lock:
            return self._series.get(_label_key(labels), 0.0)

    def render(self) -> Iterable[str]:
        with self._lock:
            series = sorted(self._series.items())
        yield f"# HELP {self.name} {self.description}"
        yield f"# TYPE {self.name} {self.kind}"
        for key, sample in series:
            yield f"{self.name}{_render_labels(key)} {sample}"


class Counter(_Metric):
    kind = "counter"

    def inc(self, amount: float = 1.0, **labels: str) -> None:
        if amount < 0:
            raise ValueError("Counters can only increase")
        key = _label_key(labels)
        with self._lock:
            self._series[key] = self._series.get(key, 0.0) + amount


class Gauge(_Metric):
    kind = "gauge"

    def set(self, value: float, **labels: str) -> None:
        with self._lock:
            self._series[_label_key(labels)] = value


@dataclass(slots=True)
class MetricsConfig:
    host: str = "127.0.0.1"
    port: int = 9000


class _MetricsServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: Tuple[str, int], metrics: "DispatchMetrics") -> None:
        super().__init__(address, _MetricsHandler)
        self.metrics = metrics


class _MetricsHandler(BaseHTTPRequestHandler):
    server: _MetricsServer

    def do_GET(self) -> None:  # noqa: N802
        if self.path.split("?", 1)[0] != "/metrics":
            self.send_error(404)
            return

        body = self.server.metrics.render().encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", CONTENT_TYPE)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:  # noqa: A003
        logger.debug("metrics %s", format % args)


class DispatchMetrics:
    """Counters fed from dispatch events, served on ``/metrics``."""

    def __init__(self, config: MetricsConfig | None = None) -> None:
        self._config = config or MetricsConfig()
        self._server: _MetricsServer | None = None
        self._thread: threading.Thread | None = None
        self.commands_total = Counter(
            "slashbot_commands_total",
            "Dispatched commands by outcome",
        )
        self.events_total = Counter(
            "slashbot_events_total",
            "Events published on the event bus",
        )
        self.active_cooldowns = Gauge(
            "slashbot_active_cooldowns",
            "Cooldown entries currently held by the store",
        )
        self._samplers: List[Tuple[Gauge, Callable[[], float]]] = []

    @property
    def config(self) -> MetricsConfig:
        return self._config

    @property
    def metrics(self) -> List[_Metric]:
        return [self.commands_total, self.events_total, self.active_cooldowns]

    def sample(self, gauge: Gauge, source: Callable[[], float]) -> None:
        """Refresh ``gauge`` from ``source`` every time metrics are rendered."""

        self._samplers.append((gauge, source))

    def refresh(self) -> None:
        for gauge, source in self._samplers:
            try:
                gauge.set(source())
            except Exception:
                logger.exception("Failed to sample %s", gauge.name)

    def start_server(self) -> None:
        if self.server_running:
            return

        self._server = _MetricsServer((self._config.host, self._config.port), self)
        self._thread = threading.Thread(
            target=self._server.serve_forever,
            name="metrics-server",
            daemon=True,
        )
        self._thread.start()
        logger.info(
            "Metrics available on http://%s:%s/metrics",
            self._config.host,
            self._server.server_address[1],
        )

    def stop_server(self) -> None:
        server, thread = self._server, self._thread
        self._server = self._thread = None
        if server is not None:
            server.shutdown()
            server.server_close()
        if thread is not None:
            thread.join(timeout=1)

    @property
    def server_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def render(self) -> str:
        self.refresh()
        lines: List[str] = []
        for metric in self.metrics:
            lines.extend(metric.render())
        return "\n".join(lines) + "\n"


__all__ = ["Counter", "DispatchMetrics", "Gauge", "MetricsConfig"]
