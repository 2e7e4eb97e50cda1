import time
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

# Nomes usados pelo controller e pelo client do Gotify
REQUESTS = "requests"
REQUESTS_FAILED = "requests_failed"
GOTIFY_SENDS = "gotify_sends"
GOTIFY_SENDS_FAILED = "gotify_sends_failed"
REQUEST_DURATION = "request_duration"
GOTIFY_SEND_DURATION = "gotify_send_duration"

COUNTERS = {
    REQUESTS: ("app_requests_total", "Total number of requests received"),
    REQUESTS_FAILED: ("app_requests_failed_total", "Total number of failed requests"),
    GOTIFY_SENDS: ("app_gotify_sends_total", "Total number of notifications sent to Gotify"),
    GOTIFY_SENDS_FAILED: ("app_gotify_sends_failed_total", "Total number of notifications failed to send to Gotify"),
}

HISTOGRAMS = {
    REQUEST_DURATION: ("app_requests_duration_seconds", "Duration of handling incoming requests in seconds"),
    GOTIFY_SEND_DURATION: ("app_gotify_send_duration_seconds", "Duration of Gotify notification send operations in seconds."),
}


class MetricsSink(ABC):
    """Interface mínima usada pelo relay: só incrementa e observa, nunca lê."""

    enabled = False

    @abstractmethod
    def increment(self, name: str) -> None:
        ...

    @abstractmethod
    def observe(self, name: str, value: float) -> None:
        ...


class NoopMetrics(MetricsSink):
    """Usado quando PROMETHEUS_METRICS está desligado."""

    def increment(self, name: str) -> None:
        pass

    def observe(self, name: str, value: float) -> None:
        pass


class PrometheusMetrics(MetricsSink):
    """
    Instrumentos Prometheus registrados uma única vez, no construtor,
    em um CollectorRegistry próprio da instância.
    """

    enabled = True

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.start_time = time.time()

        self._counters: Dict[str, Counter] = {}
        for key, (name, documentation) in COUNTERS.items():
            self._counters[key] = Counter(name, documentation, registry=self.registry)

        self._histograms: Dict[str, Histogram] = {}
        for key, (name, documentation) in HISTOGRAMS.items():
            self._histograms[key] = Histogram(name, documentation, registry=self.registry)

        self.uptime = Gauge("app_uptime_seconds", "Time in seconds since the application started.",
                            registry=self.registry)
        self.uptime.set_function(lambda: time.time() - self.start_time)

        # séries process_* e python_info, como no handler padrão do Prometheus
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)

    def increment(self, name: str) -> None:
        self._counters[name].inc()

    def observe(self, name: str, value: float) -> None:
        self._histograms[name].observe(value)

    def render(self) -> Tuple[bytes, str]:
        return generate_latest(self.registry), CONTENT_TYPE_LATEST


def build_metrics(settings) -> MetricsSink:
    if settings.metrics_enabled:
        return PrometheusMetrics()
    return NoopMetrics()
