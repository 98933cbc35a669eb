from prometheus_client import REGISTRY, CollectorRegistry, Counter, start_http_server

from .metrics import Metrics
from .metrics_constants import METRIC_DESCRIPTIONS, METRIC_LABEL_NAMES


class PrometheusMetrics(Metrics):
    """Counters backed by `prometheus_client`.

    Pass `port` to expose them over HTTP, which is useful when a long test
    session is scraped from CI. Tests should inject their own registry.
    """

    def __init__(self, registry: CollectorRegistry | None = None, port: int | None = None):
        self._registry = registry or REGISTRY
        self._counters: dict[str, Counter] = {
            name: Counter(
                name.removesuffix("_total"),
                METRIC_DESCRIPTIONS[name],
                labelnames=METRIC_LABEL_NAMES[name],
                registry=self._registry,
            )
            for name in METRIC_DESCRIPTIONS
        }
        if port is not None:
            start_http_server(port, registry=self._registry)

    def inc(self, metric_name: str, amount: float = 1, **labels: str) -> None:
        try:
            counter = self._counters[metric_name]
        except KeyError:
            raise ValueError(f"Unknown metric: {metric_name}") from None
        expected = METRIC_LABEL_NAMES[metric_name]
        counter.labels(**{name: str(labels.get(name, "")) for name in expected}).inc(amount)
