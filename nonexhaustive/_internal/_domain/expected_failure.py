"""The failure channel and the adapter that downgrades failures to expected ones.

Harness code never raises its assertion failures directly; it hands them to
`report_failure`. Outside an expectation scope that raises immediately, which
is what a strict test wants. Inside `ExpectedFailureAdapter.run_expecting_failure`
the failure is collected instead and the harness carries on, so one relaxed
call can let several strict complaints slide.
"""

from __future__ import annotations

import contextlib
import contextvars
from collections.abc import Awaitable, Callable, Iterator
from typing import Any, Literal, TypeVar

from .._framework.logger import Logger, INFO, WARNING
from .._framework.metrics import Metrics
from .._framework.metrics_constants import (
    DOWNGRADED_FAILURES_TOTAL,
    FLUSHED_EFFECTS_TOTAL,
    LABEL_KIND,
    LABEL_STORE,
    SKIPPED_ACTIONS_TOTAL,
    UNEXPECTED_STRICT_SUCCESS_TOTAL,
)
from .._utils.call_site import CallSite
from .errors import EffectFailed, StoreFailure, UnexpectedStrictSuccess
from .report import SKIPPED_ASSERTIONS_MARKER, ReportEntry, SessionReport

R = TypeVar("R")


class SkippedAction(StoreFailure):
    kind = "skipped_action"

    def __init__(self, message: str, action: Any, *, location: CallSite | None = None):
        self.action = action
        super().__init__(message, location=location)


class SkippedEffects(StoreFailure):
    kind = "skipped_effects"

    def __init__(self, message: str, count: int, *, location: CallSite | None = None):
        self.count = count
        super().__init__(message, location=location)


class _FailureScope:
    def __init__(self) -> None:
        self.failures: list[StoreFailure] = []
        self.active = True


_scope_var: contextvars.ContextVar[_FailureScope | None] = contextvars.ContextVar(
    "nonexhaustive_expected_failure_scope",
    default=None,
)


def report_failure(failure: StoreFailure) -> None:
    """Raise `failure`, or record it when an expected-failure scope is open."""
    scope = _scope_var.get()
    if scope is None or not scope.active:
        raise failure
    scope.failures.append(failure)


@contextlib.contextmanager
def _expecting_failures() -> Iterator[_FailureScope]:
    scope = _FailureScope()
    token = _scope_var.set(scope)
    try:
        yield scope
    finally:
        scope.active = False
        _scope_var.reset(token)


def annotate(message: str) -> str:
    if message.startswith(SKIPPED_ASSERTIONS_MARKER):
        return message
    return f"{SKIPPED_ASSERTIONS_MARKER}\n\n{message}"


class ExpectedFailureAdapter:
    """Single chokepoint turning "would fail a strict test" into an accepted relaxation."""

    def __init__(
        self,
        *,
        report: SessionReport,
        logger: Logger,
        metrics: Metrics,
        on_unexpected_success: Literal["log", "fail"] = "log",
    ):
        self._report = report
        self._logger = logger
        self._metrics = metrics
        self._on_unexpected_success = on_unexpected_success

    async def run_expecting_failure(
        self,
        body: Callable[[], Awaitable[R]],
        *,
        strict: bool = False,
        reason: str = "call",
        location: CallSite | None = None,
    ) -> R | None:
        if strict:
            return await body()

        result: R | None = None
        with _expecting_failures() as scope:
            try:
                result = await body()
            except StoreFailure as e:
                scope.failures.append(e)
            except AssertionError as e:
                scope.failures.append(StoreFailure(str(e), location=location))

        if not scope.failures:
            await self._unexpected_success(reason, location)
            return result

        crashes = [f for f in scope.failures if isinstance(f, EffectFailed)]
        for failure in scope.failures:
            if not isinstance(failure, EffectFailed):
                await self.downgrade(failure)
        if crashes:
            # effect crashes stay fatal outside teardown
            raise crashes[0]
        return result

    async def downgrade(self, failure: StoreFailure) -> None:
        message = annotate(failure.message)
        location = str(failure.location) if failure.location else None
        store = self._report.store

        if isinstance(failure, SkippedAction):
            entry = ReportEntry(
                kind="skipped_action",
                message=message,
                failure_kind=failure.kind,
                action=repr(failure.action),
                location=location,
            )
            self._metrics.inc(SKIPPED_ACTIONS_TOTAL, **{LABEL_STORE: store})
        else:
            entry = ReportEntry(
                kind="downgraded_failure",
                message=message,
                failure_kind=failure.kind,
                location=location,
            )
            if isinstance(failure, SkippedEffects):
                self._metrics.inc(FLUSHED_EFFECTS_TOTAL, failure.count, **{LABEL_STORE: store})

        self._metrics.inc(DOWNGRADED_FAILURES_TOTAL, **{LABEL_STORE: store, LABEL_KIND: failure.kind})
        self._report.add(entry)
        await self._logger._log(
            INFO,
            message,
            marker=SKIPPED_ASSERTIONS_MARKER,
            kind=entry.kind,
            failure_kind=failure.kind,
            store=store,
            location=location,
        )

    async def _unexpected_success(self, reason: str, location: CallSite | None) -> None:
        anomaly = UnexpectedStrictSuccess(
            f"Expected the relaxed {reason} to reveal a discrepancy, but it passed strictly. "
            "Pass strict=True if the assertion is meant to be exhaustive.",
            location=location,
        )
        if self._on_unexpected_success == "fail":
            raise anomaly

        self._metrics.inc(UNEXPECTED_STRICT_SUCCESS_TOTAL, **{LABEL_STORE: self._report.store})
        self._report.add(
            ReportEntry(
                kind="unexpected_strict_success",
                message=anomaly.message,
                failure_kind=anomaly.kind,
                location=str(location) if location else None,
            )
        )
        await self._logger._log(
            WARNING,
            anomaly.message,
            kind="unexpected_strict_success",
            store=self._report.store,
            location=str(location) if location else None,
        )
