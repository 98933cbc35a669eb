"""Ways of saying which action a test expects.

Actions are plain values: dataclasses, `msgspec.Struct`s, enum members, or
anything else with a sensible `__eq__`. A tagged union is just a set of such
classes, so matching "a case of the union" is an `isinstance` check plus an
optional payload decomposition.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable


@dataclass(frozen=True)
class Extracted:
    """Successful match. `payload` may legitimately be None."""

    payload: Any


@runtime_checkable
class ActionPattern(Protocol):
    def try_extract(self, action: Any) -> Extracted | None: ...


@dataclass(frozen=True)
class Value:
    """Matches actions equal to `action`."""

    action: Any

    def try_extract(self, action: Any) -> Extracted | None:
        return Extracted(action) if action == self.action else None

    def __repr__(self) -> str:
        return repr(self.action)


class Case:
    """Matches one case of an action union, whatever its payload.

        Case(Response2)                      # any Response2(...)
        Case(Response2, "text")              # payload is action.text
        Case(Child, "action").then(Case(Tapped))   # Child(action=Tapped(...))

    `variant` is a class or an enum member. `payload` is an attribute name or
    a callable taking the matched action.
    """

    def __init__(
        self,
        variant: type | enum.Enum,
        payload: str | Callable[[Any], Any] | None = None,
    ):
        self.variant = variant
        self._payload = payload
        self._inner: Case | None = None

    def then(self, inner: Case) -> Case:
        composed = Case(self.variant, self._payload)
        composed._inner = inner if self._inner is None else self._inner.then(inner)
        return composed

    def _matches_variant(self, action: Any) -> bool:
        if isinstance(self.variant, type):
            return isinstance(action, self.variant)
        return action is self.variant or action == self.variant

    def _extract_payload(self, action: Any) -> Any:
        if self._payload is None:
            return action
        if isinstance(self._payload, str):
            return getattr(action, self._payload)
        return self._payload(action)

    def try_extract(self, action: Any) -> Extracted | None:
        if not self._matches_variant(action):
            return None
        payload = self._extract_payload(action)
        if self._inner is None:
            return Extracted(payload)
        return self._inner.try_extract(payload)

    def __repr__(self) -> str:
        name = getattr(self.variant, "__qualname__", None) or repr(self.variant)
        text = f"Case({name})"
        if self._inner is not None:
            text = f"{text}.then({self._inner!r})"
        return text


def as_pattern(expected: Any) -> ActionPattern:
    if isinstance(expected, (Value, Case)):
        return expected
    if isinstance(expected, type):
        return Case(expected)
    if not isinstance(expected, enum.Enum) and isinstance(expected, ActionPattern):
        return expected
    return Value(expected)
