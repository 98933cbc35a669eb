from __future__ import annotations

from typing import Literal

import msgspec

SKIPPED_ASSERTIONS_MARKER = "✅ Skipped assertions: …"

EntryKind = Literal[
    "skipped_action",
    "downgraded_failure",
    "unexpected_strict_success",
    "teardown_error",
]


class ReportEntry(msgspec.Struct, frozen=True, kw_only=True):
    kind: EntryKind
    message: str
    failure_kind: str | None = None
    action: str | None = None
    location: str | None = None


class SessionReport(msgspec.Struct, kw_only=True):
    """Everything a relaxed store let slide during one test, in order."""

    store: str
    entries: list[ReportEntry] = []

    def add(self, entry: ReportEntry) -> None:
        self.entries.append(entry)

    def of_kind(self, kind: EntryKind) -> list[ReportEntry]:
        return [e for e in self.entries if e.kind == kind]

    @property
    def skipped_actions(self) -> list[str]:
        return [e.action for e in self.of_kind("skipped_action") if e.action is not None]

    @property
    def anomalies(self) -> list[ReportEntry]:
        return self.of_kind("unexpected_strict_success")

    def to_json(self) -> bytes:
        return msgspec.json.encode(self)
