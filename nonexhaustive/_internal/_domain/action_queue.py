from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .errors import QueueEmpty
from .matching import ActionPattern


class Origin(enum.Enum):
    EFFECT = "effect"
    STIMULUS = "stimulus"


@dataclass(frozen=True)
class PendingAction:
    action: Any
    origin: Origin = Origin.EFFECT


class ActionQueue:
    """FIFO of actions produced but not yet received by the test.

    Order is emission order. Nothing here reorders or deduplicates.
    """

    def __init__(self) -> None:
        self._records: deque[PendingAction] = deque()

    def enqueue(self, record: PendingAction) -> None:
        self._records.append(record)

    def peek_front(self) -> PendingAction | None:
        return self._records[0] if self._records else None

    def pop_front(self) -> PendingAction:
        if not self._records:
            raise QueueEmpty("pop_front() called on an empty action queue")
        return self._records.popleft()

    def is_empty(self) -> bool:
        return not self._records

    def drain_all(self) -> list[PendingAction]:
        records = list(self._records)
        self._records.clear()
        return records

    def first_match(self, pattern: ActionPattern) -> PendingAction | None:
        for record in self._records:
            if pattern.try_extract(record.action) is not None:
                return record
        return None

    def actions(self) -> list[Any]:
        return [r.action for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PendingAction]:
        return iter(list(self._records))
