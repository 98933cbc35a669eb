"""Run the test suite under coverage: `python scripts/run_cov.py [--out DIR]`."""

from __future__ import annotations

import argparse
import os
import shutil
import subprocess

def run(cmd: list[str]) -> None:
    print("$", " ".join(cmd), flush=True)
    subprocess.check_call(cmd)

def cov_nonexhaustive(html_dir: str) -> None:
    if os.path.exists(html_dir):
        shutil.rmtree(html_dir)
    run(["coverage", "erase"])
    run([
        "pytest", "tests",
        "--cov=nonexhaustive", "--cov-branch",
        "--cov-report=term-missing",
        f"--cov-report=html:{html_dir}",
    ])

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Coverage run for nonexhaustive")
    p.add_argument("--out", default="htmlcov/nonexhaustive")
    args = p.parse_args(argv)
    cov_nonexhaustive(args.out)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
