#!/usr/bin/env python3
# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, type check, tests and build.

Steps can be narrowed with ``--only`` or ``--skip``; ``--fail-fast`` stops
at the first failing step.
"""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"],
    "types": ["uv", "run", "ty", "check", "src/"],
    "tests": ["uv", "run", "pytest", "--cov=futspec", "--cov-report=term-missing"],
    "build": ["uv", "build"],
}


def main() -> int:
    """Run the selected CI steps and report results."""
    parser = argparse.ArgumentParser(description="Run futspec CI checks locally.")
    parser.add_argument("--only", nargs="+", choices=list(STEPS), help="Run only these steps")
    parser.add_argument("--skip", nargs="+", choices=list(STEPS), default=[], help="Skip these steps")
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first failing step")
    args = parser.parse_args()

    selected = [name for name in (args.only or STEPS) if name not in args.skip]
    results: list[tuple[str, bool, float]] = []
    for name in selected:
        passed, elapsed = _run_step(name, STEPS[name])
        results.append((name, passed, elapsed))
        if not passed and args.fail_fast:
            break

    _print_summary(results, skipped=[name for name in STEPS if name not in {r[0] for r in results}])
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _run_step(name: str, cmd: list[str]) -> tuple[bool, float]:
    _banner(name)
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=_repo_root())
    return proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]], skipped: list[str]) -> None:
    _banner("  Summary")
    for name, passed, elapsed in results:
        if passed:
            print(chalk.green(f"  PASS  {name} ({elapsed:.1f}s)"))
        else:
            print(chalk.red(f"  FAIL  {name} ({elapsed:.1f}s)"))
    for name in skipped:
        print(chalk.yellow(f"  SKIP  {name}"))
    print()


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


if __name__ == "__main__":
    sys.exit(main())
