"""Partial state comparison and the structural diff shown when it fails."""

from __future__ import annotations

import copy
import datetime
import decimal
import uuid
from dataclasses import dataclass
from pprint import pformat
from typing import Any, Callable

import msgspec

from .._utils.call_site import CallSite
from .._utils.text import indent
from .errors import MutationBlockFailed, UnsupportedStateComparison

Mutator = Callable[[Any], Any]
"""Edits a copy of the scoped state in place.

For immutable (hashable) state it returns the replacement value instead. The
return value of a mutator over mutable state is ignored.
"""

_LEAF_TYPES = (
    bytes,
    bytearray,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    decimal.Decimal,
)


class _Missing:
    def __repr__(self) -> str:
        return "<absent>"


MISSING = _Missing()


@dataclass(frozen=True)
class DiffEntry:
    path: str
    expected: Any
    actual: Any


@dataclass(frozen=True)
class StateDiff:
    entries: tuple[DiffEntry, ...] = ()
    expected_text: str | None = None
    actual_text: str | None = None

    @property
    def is_structural(self) -> bool:
        return self.expected_text is None

    def render(self) -> str:
        if not self.is_structural:
            return (
                f"Expected:\n{indent(self.expected_text or '', 2)}\n\n"
                f"Actual:\n{indent(self.actual_text or '', 2)}"
            )
        lines: list[str] = []
        for entry in self.entries:
            lines.append(entry.path or "<root>")
            lines.append(f"  − {entry.expected!r}")
            lines.append(f"  + {entry.actual!r}")
        return f"{indent(chr(10).join(lines), 4)}\n\n(Expected: −, Actual: +)"


@dataclass(frozen=True)
class Outcome:
    matched: bool
    diff: StateDiff | None = None


def supports_equality(value: Any) -> bool:
    return type(value).__eq__ is not object.__eq__


def is_immutable(value: Any) -> bool:
    """Hashable values can only be replaced, never edited in place."""
    return type(value).__hash__ is not None


def _to_tree(value: Any) -> Any:
    return msgspec.to_builtins(value, builtin_types=_LEAF_TYPES, order="sorted")


def _sorted_keys(keys: set[Any]) -> list[Any]:
    try:
        return sorted(keys)
    except TypeError:
        return sorted(keys, key=repr)


def _child_path(path: str, key: Any) -> str:
    if isinstance(key, str) and key.isidentifier():
        return f"{path}.{key}" if path else key
    return f"{path}[{key!r}]"


def _walk(path: str, expected: Any, actual: Any, out: list[DiffEntry]) -> None:
    if isinstance(expected, dict) and isinstance(actual, dict):
        for key in _sorted_keys(set(expected) | set(actual)):
            _walk(
                _child_path(path, key),
                expected.get(key, MISSING),
                actual.get(key, MISSING),
                out,
            )
        return
    if isinstance(expected, list) and isinstance(actual, list):
        for i in range(max(len(expected), len(actual))):
            _walk(
                f"{path}[{i}]",
                expected[i] if i < len(expected) else MISSING,
                actual[i] if i < len(actual) else MISSING,
                out,
            )
        return
    if type(expected) is not type(actual) or expected != actual:
        out.append(DiffEntry(path, expected, actual))


def _root_name(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set, frozenset, str, int, float, bool)) or value is None:
        return ""
    return type(value).__name__


def diff_states(expected: Any, actual: Any) -> StateDiff:
    """Only the differing leaves, in a stable order.

    Falls back to two pretty-printed blocks when msgspec cannot see into the
    values.
    """
    try:
        expected_tree = _to_tree(expected)
        actual_tree = _to_tree(actual)
    except TypeError:
        return StateDiff(expected_text=pformat(expected), actual_text=pformat(actual))

    entries: list[DiffEntry] = []
    _walk(_root_name(expected), expected_tree, actual_tree, entries)
    if not entries:
        # Equal trees but unequal values, e.g. a custom __eq__.
        return StateDiff(expected_text=pformat(expected), actual_text=pformat(actual))
    return StateDiff(entries=tuple(entries))


def compare(
    before: Any,
    mutator: Mutator | None,
    read_actual: Callable[[], Any],
    *,
    location: CallSite | None = None,
) -> Outcome:
    """Check that `mutator` applied to a copy of `before` matches the live state.

    Raises `UnsupportedStateComparison` or `MutationBlockFailed`; the caller
    decides whether those are fatal.
    """
    if mutator is None:
        return Outcome(matched=True)

    if not supports_equality(before):
        raise UnsupportedStateComparison(
            f"{type(before).__name__} does not define __eq__, so a state assertion "
            "cannot be checked. Use a dataclass, msgspec.Struct or another value type.",
            location=location,
        )

    expected = copy.deepcopy(before)
    try:
        returned = mutator(expected)
    except Exception as e:
        raise MutationBlockFailed(e, location=location) from e
    if returned is not None and is_immutable(before):
        expected = returned

    actual = read_actual()
    if expected == actual:
        return Outcome(matched=True)
    return Outcome(matched=False, diff=diff_states(expected, actual))


def mismatch_message(diff: StateDiff, prefix: str | None = None, *, expected_change: bool = True) -> str:
    header = (
        "A state change does not match expectation: …"
        if expected_change
        else "State was not expected to change, but a change occurred: …"
    )
    message = f"{header}\n\n{diff.render()}"
    return f"{prefix}\n\n{message}" if prefix else message
