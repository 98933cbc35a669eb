import asyncio

import pytest

from nonexhaustive._internal._framework.logger import ERROR
from nonexhaustive._internal._utils.safe_create_task import safe_create_task
from tests.assets.support.logger_inmemory import InMemoryLogger

@pytest.mark.asyncio
async def test_runs_coroutine_to_completion():
    results = []

    async def work():
        results.append("done")

    await safe_create_task(work())
    assert results == ["done"]

@pytest.mark.asyncio
async def test_names_task_after_coroutine_by_default():
    async def fetch():
        return None

    t = safe_create_task(fetch())
    assert t.get_name() == "fetch"
    await t

@pytest.mark.asyncio
async def test_logs_and_notifies_on_exception():
    logger = InMemoryLogger()
    failures = []

    async def boom():
        raise RuntimeError("kaput")

    def on_failure(exc, name, tb):
        failures.append((type(exc), name))

    await safe_create_task(boom(), logger, "effect-1", on_failure=on_failure)

    assert failures == [(RuntimeError, "effect-1")]
    entry = logger.logs[0]
    assert entry.level == ERROR
    assert "[Exception in effect] (effect-1): kaput" in entry.msg
    assert "RuntimeError" in entry.kwargs["traceback"]

@pytest.mark.asyncio
async def test_async_failure_hook_is_awaited():
    seen = []

    async def boom():
        raise ValueError("x")

    async def on_failure(exc, name, tb):
        await asyncio.sleep(0)
        seen.append(name)

    await safe_create_task(boom(), name="async-hook", on_failure=on_failure)
    assert seen == ["async-hook"]

@pytest.mark.asyncio
async def test_cancellation_propagates():
    logger = InMemoryLogger()

    async def forever():
        await asyncio.sleep(10)

    t = safe_create_task(forever(), logger)
    await asyncio.sleep(0)
    t.cancel()
    with pytest.raises(asyncio.CancelledError):
        await t
    assert t.cancelled()
    assert logger.logs == []
