#!/usr/bin/env python3
"""Run formatting checks and the test suite.

Runs isort, black and pytest in sequence from the project root.

Usage:
    python scripts/lint_all.py [--check] [--skip-tests]

Options:
    --check: Only report formatting problems (don't modify files)
    --skip-tests: Skip running pytest
"""

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).parent.parent
SOURCE_DIRS = ["src", "tests", "scripts"]


def run_command(cmd: List[str], description: str) -> bool:
    """Run a command from the project root and report whether it passed."""
    print(f"\n{'=' * 60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print(f"{'=' * 60}\n")

    try:
        result = subprocess.run(cmd, cwd=PROJECT_ROOT, check=False)
    except FileNotFoundError as e:
        print(f"\n✗ {description}: {e}")
        print("  Install the dev extra: pip install -e '.[dev]'\n")
        return False

    if result.returncode == 0:
        print(f"\n✓ {description} passed\n")
        return True

    print(f"\n✗ {description} failed (exit code: {result.returncode})\n")
    return False


def main() -> int:
    """Run every check; return 0 only if all of them passed."""
    parser = argparse.ArgumentParser(description="Run formatting and test checks")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only check formatting (don't modify files)",
    )
    parser.add_argument("--skip-tests", action="store_true", help="Skip running pytest")
    args = parser.parse_args()

    isort_cmd = ["isort", *SOURCE_DIRS]
    black_cmd = ["black", *SOURCE_DIRS]
    if args.check:
        isort_cmd += ["--check-only", "--diff"]
        black_cmd.append("--check")

    checks = [
        (isort_cmd, "isort (import sorting)"),
        (black_cmd, "black (code formatting)"),
    ]
    if not args.skip_tests:
        checks.append((["pytest", "tests/", "-v"], "pytest (tests)"))

    print("\n" + "=" * 60)
    print("Atelier Code Quality Checks")
    print("=" * 60)

    results = [run_command(cmd, description) for cmd, description in checks]

    print("\n" + "=" * 60)
    if all(results):
        print("✓ All checks passed!")
        print("=" * 60 + "\n")
        return 0

    print("✗ Some checks failed. Please fix the issues above.")
    print("=" * 60 + "\n")
    return 1


if __name__ == "__main__":
    sys.exit(main())
