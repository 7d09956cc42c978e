#!/usr/bin/env python3
# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the strictoml CI checks locally: format, lint, type check, tests, fixture smoke test and build."""

import argparse
import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

FIXTURES = pathlib.Path(__file__).parent.parent / "tests" / "fixtures"

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/"],
    "typecheck": ["uv", "run", "ty", "check", "src/"],
    "tests": ["uv", "run", "pytest", "--cov=strictoml", "--cov-report=term-missing"],
    "fixtures": ["uv", "run", "strictoml", "check", *sorted(str(p) for p in FIXTURES.glob("*.toml"))],
    "build": ["uv", "build"],
}


def main() -> int:
    """Run the selected CI steps and report results."""
    parser = argparse.ArgumentParser(description="Run strictoml CI steps")
    parser.add_argument("steps", nargs="*", metavar="STEP", help=f"Steps to run (default: all of {', '.join(STEPS)})")
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first failing step")
    args = parser.parse_args()

    selected = args.steps or list(STEPS)
    unknown = [name for name in selected if name not in STEPS]
    if unknown:
        parser.error(f"unknown step(s): {', '.join(unknown)}")
    results: list[tuple[str, bool, float]] = []
    for name in selected:
        passed, elapsed = _run_step(name, STEPS[name])
        results.append((name, passed, elapsed))
        if not passed and args.fail_fast:
            break

    return _print_summary(results)


# ################
# Implementation
# ################


def _repo_root() -> pathlib.Path:
    return pathlib.Path(__file__).parent.parent


def _run_step(name: str, cmd: list[str]) -> tuple[bool, float]:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(name.capitalize()))
    print(sep)
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=_repo_root())
    return proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> int:
    sep = "=" * 60
    print(f"\n{chalk.blue(sep)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(sep))
    for name, passed, elapsed in results:
        if passed:
            print(chalk.green(f"  PASS  {name} ({elapsed:.1f}s)"))
        else:
            print(chalk.red(f"  FAIL  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if results and all(passed for _, passed, _ in results) else 1


if __name__ == "__main__":
    sys.exit(main())
