from .metrics import Metrics


class NoOpMetrics(Metrics):
    def inc(self, metric_name: str, amount: float = 1, **labels: str) -> None:
        return None
