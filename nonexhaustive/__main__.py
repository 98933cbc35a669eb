from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from ._internal._domain.report import SKIPPED_ASSERTIONS_MARKER
from ._internal._framework.logger_jsonl import read_records


def _audit(path: Path, kind: str | None) -> int:
    if not path.is_file():
        print(f"audit log not found: {path}")
        return 2

    records = [
        r for r in read_records(path)
        if r.fields.get("marker") == SKIPPED_ASSERTIONS_MARKER
        or r.fields.get("kind") == "unexpected_strict_success"
    ]
    if kind is not None:
        records = [r for r in records if r.fields.get("kind") == kind]

    counts = Counter(str(r.fields.get("kind", "?")) for r in records)
    print(f"{len(records)} relaxed assertion record(s) in {path}")
    for k, n in sorted(counts.items()):
        print(f"  {k}: {n}")
    for r in records:
        summary = r.msg.splitlines()[-1] if r.msg else ""
        where = r.fields.get("location") or "?"
        print(f"[{r.fields.get('store', '?')}] {where}: {summary}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m nonexhaustive",
        description="Developer tools for non-exhaustive test stores.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    audit_p = sub.add_parser(
        "audit",
        help="Summarise skipped assertions recorded by a JsonlLogger.",
    )
    audit_p.add_argument("path", type=Path, help="JSON-lines audit log written during a test run.")
    audit_p.add_argument(
        "--kind",
        choices=["skipped_action", "downgraded_failure", "unexpected_strict_success"],
        help="Only show records of this kind.",
    )

    args = parser.parse_args(argv)

    if args.command == "audit":
        return _audit(args.path, args.kind)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
