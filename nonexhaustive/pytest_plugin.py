"""pytest fixtures for non-exhaustive stores.

Registered through the `pytest11` entry point, so installing the package is
enough. Stores made by `store_factory` are finished at fixture teardown.
"""

from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio

from ._internal._domain.non_exhaustive_store import NonExhaustiveTestStore
from ._internal._framework.config import StoreConfig, load_config


@pytest.fixture(scope="session")
def nonexhaustive_config(pytestconfig: pytest.Config) -> StoreConfig:
    return load_config(pytestconfig.rootpath / "pyproject.toml")


@pytest_asyncio.fixture
async def store_factory(nonexhaustive_config: StoreConfig, request: pytest.FixtureRequest):
    stores: list[NonExhaustiveTestStore] = []

    def _factory(initial_state: Any, reducer: Any, environment: Any = None, **kwargs: Any) -> NonExhaustiveTestStore:
        kwargs.setdefault("config", nonexhaustive_config)
        kwargs.setdefault("name", request.node.name)
        store = NonExhaustiveTestStore(initial_state, reducer, environment, **kwargs)
        stores.append(store)
        return store

    yield _factory

    for store in stores:
        await store.finish()
