from collections import Counter

from relay.metrics import MetricsSink


class RecordingMetrics(MetricsSink):
    """Sink em memória para os testes inspecionarem o que foi registrado."""

    def __init__(self):
        self.counts = Counter()
        self.observations = {}

    def increment(self, name):
        self.counts[name] += 1

    def observe(self, name, value):
        self.observations.setdefault(name, []).append(value)


class StubGatewayClient:
    def __init__(self, status_code=200, error=None):
        self.status_code = status_code
        self.error = error
        self.sent = []

    def send(self, notification):
        self.sent.append(notification)
        if self.error is not None:
            raise self.error
        return self.status_code
