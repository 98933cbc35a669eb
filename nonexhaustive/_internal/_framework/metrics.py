from abc import ABC, abstractmethod


class Metrics(ABC):
    @abstractmethod
    def inc(self, metric_name: str, amount: float = 1, **labels: str) -> None:
        """Increment a counter declared in `metrics_constants`."""
