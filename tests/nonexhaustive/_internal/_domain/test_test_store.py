import asyncio

import pytest

from nonexhaustive import Case, StoreConfig, TestStore
from nonexhaustive._internal._domain.errors import (
    ActionNotReceived,
    EffectFailed,
    EffectsStillRunning,
    NothingToSkip,
    StateMismatch,
    UnexpectedAction,
    UnhandledActions,
)
from nonexhaustive._internal._framework.logger import ERROR
from tests.assets.features.counter import CounterState, Increment, counter_reducer
from tests.assets.features.responses import Noop, OnAppear, Response1, Response2, State, feature_reducer
from tests.assets.features.search import (
    Crash,
    QueryChanged,
    SearchEnvironment,
    SearchResponse,
    SearchState,
    StartTimer,
    search_reducer,
)

FAST = StoreConfig(effect_cancel_timeout=0.2)


@pytest.mark.asyncio
async def test_exhaustive_send_and_receive():
    store = TestStore(State(), feature_reducer, config=FAST)

    await store.send(OnAppear())

    def expect_number(s):
        s.number = 42

    def expect_text(s):
        s.text = "Hello"

    await store.receive(Response1(42), expect_number)
    await store.receive(Response2("Hello"), expect_text)
    await store.finish()

    assert store.state == State(number=42, text="Hello")


@pytest.mark.asyncio
async def test_unasserted_change_fails():
    store = TestStore(CounterState(), counter_reducer)

    def expect(s):
        s.count = 1

    with pytest.raises(StateMismatch) as exc_info:
        await store.send(Increment(), expect)

    assert "CounterState.is_even" in str(exc_info.value)
    assert "test_test_store.py" in str(exc_info.value.location)


@pytest.mark.asyncio
async def test_change_without_assertion_fails():
    store = TestStore(CounterState(), counter_reducer)

    with pytest.raises(StateMismatch) as exc_info:
        await store.send(Increment())

    assert exc_info.value.message.startswith("State was not expected to change")


@pytest.mark.asyncio
async def test_send_with_queued_actions_fails_before_reducing():
    store = TestStore(State(), feature_reducer)
    await store.send(OnAppear())

    with pytest.raises(UnhandledActions) as exc_info:
        await store.send(Noop())

    assert "Must handle 2 received actions before sending an action" in exc_info.value.message
    assert len(store.queue) == 2


@pytest.mark.asyncio
async def test_receive_of_a_later_action_is_unexpected():
    store = TestStore(State(), feature_reducer)
    await store.send(OnAppear())

    with pytest.raises(UnexpectedAction) as exc_info:
        await store.receive(Case(Response2))

    assert "Received: Response1(value=42)" in exc_info.value.message
    assert len(store.queue) == 2


@pytest.mark.asyncio
async def test_receive_of_an_absent_action_leaves_the_queue_alone():
    store = TestStore(State(), feature_reducer)
    await store.send(OnAppear())

    with pytest.raises(ActionNotReceived) as exc_info:
        await store.receive(Response1(1))

    assert "but didn't get one" in exc_info.value.message
    assert store.queue.actions() == [Response1(42), Response2("Hello")]


@pytest.mark.asyncio
async def test_receive_on_an_empty_queue():
    store = TestStore(State(), feature_reducer)

    with pytest.raises(ActionNotReceived, match="but received none"):
        await store.receive(Response1(42))


@pytest.mark.asyncio
async def test_finish_fails_on_unhandled_actions():
    store = TestStore(State(), feature_reducer)
    await store.send(OnAppear())

    with pytest.raises(UnhandledActions, match="2 received actions were not asserted on"):
        await store.finish()


@pytest.mark.asyncio
async def test_skip_received_actions_replays_them():
    store = TestStore(State(), feature_reducer)
    await store.send(OnAppear())

    skipped = await store.skip_received_actions()

    assert skipped == [Response1(42), Response2("Hello")]
    assert store.state == State(number=42, text="Hello")
    assert store.queue.is_empty()

    with pytest.raises(NothingToSkip):
        await store.skip_received_actions()
    assert await store.skip_received_actions(strict=False) == []


@pytest.mark.asyncio
async def test_effect_result_is_received_after_waiting():
    store = TestStore(SearchState(), search_reducer, SearchEnvironment(delay=0.01), config=FAST)

    def loading(s):
        s.query = "ap"
        s.is_loading = True

    def loaded(s):
        s.results = ["apple", "apricot"]
        s.is_loading = False

    task = await store.send(QueryChanged("ap"), loading)
    assert task.is_running

    assert await store.wait_for_action(SearchResponse, timeout=1.0)
    await store.receive(SearchResponse(("apple", "apricot")), loaded)
    await store.finish()
    assert not task.is_running


@pytest.mark.asyncio
async def test_wait_for_action_returns_once_nothing_is_running():
    store = TestStore(CounterState(), counter_reducer)

    loop = asyncio.get_running_loop()
    started = loop.time()
    assert not await store.wait_for_action(Increment, timeout=5.0)
    assert loop.time() - started < 1.0


@pytest.mark.asyncio
async def test_running_effects_fail_finish_until_cancelled():
    store = TestStore(SearchState(), search_reducer, SearchEnvironment(tick_interval=10), config=FAST)
    task = await store.send(StartTimer())

    with pytest.raises(EffectsStillRunning, match="1 effect is still running"):
        await store.finish()

    assert await store.skip_in_flight_effects() == 1
    assert task.is_cancelled
    await store.finish()

    with pytest.raises(NothingToSkip):
        await store.skip_in_flight_effects()


@pytest.mark.asyncio
async def test_task_finish_times_out_on_a_long_effect():
    store = TestStore(SearchState(), search_reducer, SearchEnvironment(tick_interval=10), config=FAST)
    task = await store.send(StartTimer())

    with pytest.raises(EffectsStillRunning, match="still in-flight after 0.01s"):
        await task.finish(timeout=0.01)

    await task.cancel()
    assert task.is_cancelled


@pytest.mark.asyncio
async def test_effect_exception_is_reported_at_the_next_operation(logger):
    store = TestStore(SearchState(), search_reducer, SearchEnvironment(), logger=logger)
    await store.send(Crash())
    await asyncio.sleep(0.01)

    assert logger.has_log("[Exception in effect] (boom): effect exploded", min_level=ERROR)
    with pytest.raises(EffectFailed, match="An effect \\(boom\\) raised RuntimeError: effect exploded"):
        await store.finish()


@pytest.mark.asyncio
async def test_injected_actions_are_received_like_effect_output():
    store = TestStore(State(), feature_reducer)
    store.inject(Response2("pushed"))

    def expect(s):
        s.text = "pushed"

    await store.receive(Response2, expect)
    await store.finish()


@pytest.mark.asyncio
async def test_scoped_state_and_actions():
    def reducer(state, action, env):
        return counter_reducer(state["counter"], action, env)

    store = TestStore(
        {"counter": CounterState()},
        reducer,
        to_scoped_state=lambda s: s["counter"],
        from_scoped_action=lambda a: a,
    )

    def expect(s):
        s.count = 1
        s.is_even = False

    await store.send(Increment(), expect)
    assert store.scoped_state == CounterState(count=1, is_even=False)
