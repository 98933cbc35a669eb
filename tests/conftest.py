import pytest
from prometheus_client import CollectorRegistry

from nonexhaustive import NonExhaustiveTestStore, PrometheusMetrics, StoreConfig
from nonexhaustive.pytest_plugin import nonexhaustive_config, store_factory  # noqa: F401
from tests.assets.features.counter import CounterState, counter_reducer
from tests.assets.support.logger_inmemory import InMemoryLogger


@pytest.fixture
def logger():
    return InMemoryLogger()


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def metrics(registry):
    return PrometheusMetrics(registry=registry)


@pytest.fixture
def config():
    return StoreConfig(receive_timeout=0.5, effect_cancel_timeout=0.2)


@pytest.fixture
def make_store(logger, metrics, config):
    "builds relaxed stores wired to the in-memory logger and a private registry"

    def _make(initial_state=None, reducer=counter_reducer, environment=None, **kwargs):
        kwargs.setdefault("logger", logger)
        kwargs.setdefault("metrics", metrics)
        kwargs.setdefault("config", config)
        return NonExhaustiveTestStore(
            CounterState() if initial_state is None else initial_state,
            reducer,
            environment,
            **kwargs,
        )

    return _make
