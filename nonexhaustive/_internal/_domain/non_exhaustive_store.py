from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .._framework.config import StoreConfig
from .._framework.logger import Logger, ERROR
from .._framework.logger_jsonl import JsonlLogger
from .._framework.logger_noop import NoOpLogger
from .._framework.metrics import Metrics
from .._framework.metrics_noop import NoOpMetrics
from .._utils.call_site import CallSite, capture_call_site
from .effect import Effect
from .errors import ActionNotReceived, StateMismatch, StoreFailure
from .expected_failure import ExpectedFailureAdapter, report_failure
from .matching import as_pattern
from .report import SKIPPED_ASSERTIONS_MARKER, ReportEntry, SessionReport
from .skip_forward import MatchState, SkipForwardMatcher
from .state_diff import Mutator, compare, mismatch_message
from .test_store import TestStore, TestStoreTask

S = TypeVar("S")
V = TypeVar("V")
A = TypeVar("A")
E = TypeVar("E")


def _default_logger(config: StoreConfig) -> Logger:
    if config.audit_log_path:
        return JsonlLogger(config.audit_log_path, level=config.level)
    return NoOpLogger(config.level)


class NonExhaustiveTestStore(Generic[S, V, A, E]):
    """Test store that only checks what the test asserts.

    `send` and `receive` run the strict `TestStore` underneath and downgrade
    its complaints about unasserted state and unreceived actions to expected
    failures, marked with `SKIPPED_ASSERTIONS_MARKER` in the log and recorded
    on `report`. The fields a test does assert are still checked strictly.

    Use it as an async context manager, or call `finish()` when the test ends,
    so leftover actions and effects are flushed instead of leaking.

        async with NonExhaustiveTestStore(CounterState(), counter_reducer) as store:
            await store.send(Increment(), lambda s: setattr(s, "count", 1))
    """

    __test__ = False

    def __init__(
        self,
        initial_state: S,
        reducer: Callable[[S, A, E], Effect[A] | None],
        environment: E = None,
        *,
        to_scoped_state: Callable[[S], V] | None = None,
        from_scoped_action: Callable[[Any], A] | None = None,
        logger: Logger | None = None,
        metrics: Metrics | None = None,
        config: StoreConfig | None = None,
        name: str = "store",
    ):
        self._config = config or StoreConfig()
        self._logger = logger or _default_logger(self._config)
        self._metrics = metrics or NoOpMetrics()
        self.name = name
        self.report = SessionReport(store=name)
        self._harness: TestStore[S, V, A, E] = TestStore(
            initial_state,
            reducer,
            environment,
            to_scoped_state=to_scoped_state,
            from_scoped_action=from_scoped_action,
            logger=self._logger,
            config=self._config,
        )
        self._adapter = ExpectedFailureAdapter(
            report=self.report,
            logger=self._logger,
            metrics=self._metrics,
            on_unexpected_success=self._config.unexpected_strict_success,
        )
        self._finished = False

    @property
    def harness(self) -> TestStore[S, V, A, E]:
        return self._harness

    @property
    def state(self) -> S:
        return self._harness.state

    @property
    def scoped_state(self) -> V:
        return self._harness.scoped_state

    @property
    def queued_actions(self) -> list[Any]:
        return self._harness.queue.actions()

    @property
    def finished(self) -> bool:
        return self._finished

    def inject(self, action: A) -> None:
        self._harness.inject(action)

    async def send(
        self,
        action: Any,
        expect: Mutator | None = None,
        *,
        strict: bool = False,
    ) -> TestStoreTask | None:
        """Send `action` and check only the fields `expect` sets.

        Queued actions from earlier effects are skipped first: a send always
        happens against the current state.
        """
        location = capture_call_site()
        if strict:
            return await self._harness.send(action, expect)

        await self._skip_received(location)
        task = await self._adapter.run_expecting_failure(
            lambda: self._harness.send(action, expect, prefix=SKIPPED_ASSERTIONS_MARKER),
            reason=f"send of {action!r}",
            location=location,
        )
        self._assert_partial(expect, location)
        return task

    async def receive(
        self,
        expected: Any,
        expect: Mutator | None = None,
        *,
        strict: bool = False,
        timeout: float | None = None,
    ) -> None:
        """Receive `expected`, skipping any queued actions in front of it.

        `expected` is an action value (matched by equality), an action class,
        or a `Case` pattern.
        """
        location = capture_call_site()
        pattern = as_pattern(expected)
        await self._harness.wait_for_action(
            pattern,
            self._config.receive_timeout if timeout is None else timeout,
        )

        if strict:
            await self._harness.receive(pattern, expect)
            return

        if self._harness.queue.first_match(pattern) is None:
            received = "\n".join(f"  {a!r}" for a in self.queued_actions) or "  (nothing)"
            report_failure(
                ActionNotReceived(
                    f"Expected to receive an action {pattern!r}, but didn't get one.\n\n"
                    f"Received:\n{received}",
                    location=location,
                )
            )
            return

        matcher = SkipForwardMatcher(self._harness, self._adapter, pattern, location=location)
        if await matcher.run(expect) is MatchState.FOUND:
            self._assert_partial(expect, location)

    async def skip_received_actions(self, strict: bool = False) -> None:
        location = capture_call_site()
        if strict:
            await self._harness.skip_received_actions(strict=True)
            return
        await self._skip_received(location)

    async def skip_in_flight_effects(self, strict: bool = False) -> None:
        location = capture_call_site()
        if strict:
            await self._harness.skip_in_flight_effects(strict=True)
            return
        await self._skip_in_flight(location)

    async def finish(self) -> None:
        """Flush whatever the test left behind. Never fails the test.

        Each step runs even when an earlier one errored, so effects are
        always cancelled.
        """
        if self._finished:
            return
        self._finished = True
        location = capture_call_site()
        await asyncio.sleep(0)

        try:
            await self._skip_received(location)
        except Exception as e:
            self._harness.queue.drain_all()
            await self._teardown_error(e, location)

        try:
            await self._skip_in_flight(location)
        except Exception as e:
            await self._teardown_error(e, location)

        try:
            await self._harness.finish()
        except StoreFailure as e:
            await self._adapter.downgrade(e)
        except Exception as e:
            await self._teardown_error(e, location)

    async def __aenter__(self) -> NonExhaustiveTestStore[S, V, A, E]:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.finish()

    async def _teardown_error(self, error: Exception, location: CallSite | None) -> None:
        message = f"Teardown of {self.name} failed: {type(error).__name__}: {error}"
        self.report.add(
            ReportEntry(
                kind="teardown_error",
                message=message,
                location=str(location) if location else None,
            )
        )
        await self._logger._log(ERROR, message, store=self.name, error_type=type(error).__name__)

    async def _skip_received(self, location: CallSite | None) -> None:
        if self._harness.queue.is_empty():
            return
        await self._adapter.run_expecting_failure(
            lambda: self._harness.skip_received_actions(strict=False, prefix=SKIPPED_ASSERTIONS_MARKER),
            reason="skip of received actions",
            location=location,
        )

    async def _skip_in_flight(self, location: CallSite | None) -> None:
        if not self._harness.in_flight_effects:
            return
        await self._adapter.run_expecting_failure(
            lambda: self._harness.skip_in_flight_effects(strict=False, prefix=SKIPPED_ASSERTIONS_MARKER),
            reason="skip of in-flight effects",
            location=location,
        )

    def _assert_partial(self, expect: Mutator | None, location: CallSite | None) -> None:
        try:
            outcome = compare(
                self._harness.scoped_state,
                expect,
                lambda: self._harness.scoped_state,
                location=location,
            )
        except StoreFailure as e:
            report_failure(e)
            return
        if not outcome.matched and outcome.diff is not None:
            report_failure(StateMismatch(mismatch_message(outcome.diff), location=location))
