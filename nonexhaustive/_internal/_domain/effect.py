from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

A = TypeVar("A")
S = TypeVar("S")
E = TypeVar("E")


@dataclass(frozen=True)
class Effect(Generic[A]):
    """Work a reducer asks the store to perform after a state change.

    Synchronous actions (`just`) are fed back in order before `send` or
    `receive` returns. Async work (`task`, `stream`) runs as asyncio tasks and
    feeds actions back whenever it produces them.
    """

    actions: tuple[A, ...] = ()
    tasks: tuple[Callable[[], Awaitable[A | None]], ...] = ()
    streams: tuple[Callable[[], AsyncIterator[A]], ...] = ()
    name: str | None = field(default=None, compare=False)

    @classmethod
    def none(cls) -> Effect[A]:
        return cls()

    @classmethod
    def just(cls, *actions: A) -> Effect[A]:
        return cls(actions=actions)

    @classmethod
    def task(cls, fn: Callable[[], Awaitable[A | None]], *, name: str | None = None) -> Effect[A]:
        """`fn` returns one action to feed back, or None for fire-and-forget work."""
        return cls(tasks=(fn,), name=name)

    @classmethod
    def stream(cls, fn: Callable[[], AsyncIterator[A]], *, name: str | None = None) -> Effect[A]:
        return cls(streams=(fn,), name=name)

    @classmethod
    def merge(cls, *effects: Effect[A] | None) -> Effect[A]:
        present = [e for e in effects if e is not None]
        return cls(
            actions=tuple(a for e in present for a in e.actions),
            tasks=tuple(t for e in present for t in e.tasks),
            streams=tuple(s for e in present for s in e.streams),
        )

    @property
    def is_none(self) -> bool:
        return not (self.actions or self.tasks or self.streams)


Reducer = Callable[[S, A, E], "Effect[A] | None"]
"""`reducer(state, action, environment)` mutates `state` in place and returns the follow-up effect."""


def combine(*reducers: Callable[[Any, Any, Any], Effect | None]) -> Callable[[Any, Any, Any], Effect]:
    def combined(state: Any, action: Any, environment: Any) -> Effect:
        return Effect.merge(*(r(state, action, environment) for r in reducers))

    return combined
