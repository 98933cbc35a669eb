from __future__ import annotations

import enum
from typing import Any

from .._utils.call_site import CallSite
from .errors import ActionNotReceived
from .expected_failure import ExpectedFailureAdapter, SkippedAction, report_failure
from .matching import ActionPattern, Value
from .report import SKIPPED_ASSERTIONS_MARKER
from .state_diff import Mutator
from .test_store import TestStore


class MatchState(enum.Enum):
    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"


class SkipForwardMatcher:
    """Walks the queue front to back until the expected action turns up.

    One matcher per `receive`. Everything in front of the match is replayed
    through the strict harness under the expected-failure adapter and
    reported as skipped. The queue is only ever popped at the front.
    """

    def __init__(
        self,
        harness: TestStore,
        adapter: ExpectedFailureAdapter,
        pattern: ActionPattern,
        *,
        location: CallSite | None = None,
        prefix: str = SKIPPED_ASSERTIONS_MARKER,
    ):
        self._harness = harness
        self._adapter = adapter
        self._pattern = pattern
        self._location = location
        self._prefix = prefix
        self.state = MatchState.SEARCHING
        self.skipped: list[Any] = []
        self.matched: Any = None

    async def run(self, expect: Mutator | None = None) -> MatchState:
        queue = self._harness.queue
        while self.state is MatchState.SEARCHING:
            front = queue.peek_front()
            if front is None:
                self.state = MatchState.EXHAUSTED
            elif self._pattern.try_extract(front.action) is not None:
                self.state = MatchState.FOUND
                self.matched = front.action
            else:
                await self._skip(front.action)

        if self.state is MatchState.EXHAUSTED:
            report_failure(
                ActionNotReceived(
                    f"Expected to receive an action {self._pattern!r}, but didn't get one.",
                    location=self._location,
                )
            )
            return self.state

        matched = self.matched
        await self._adapter.run_expecting_failure(
            lambda: self._harness.receive(Value(matched), expect, prefix=self._prefix),
            reason=f"receive of {matched!r}",
            location=self._location,
        )
        return self.state

    async def _skip(self, action: Any) -> None:
        async def replay() -> None:
            report_failure(
                SkippedAction(
                    f"{self._prefix}\n\nSkipped receiving {action!r}",
                    action,
                    location=self._location,
                )
            )
            await self._harness.receive(Value(action), prefix=self._prefix)

        await self._adapter.run_expecting_failure(
            replay,
            reason=f"skip of {action!r}",
            location=self._location,
        )
        self.skipped.append(action)
