#!/usr/bin/env python3
# =============================================================================
# just_test v1.0.0 -- CI CHECKS RUNNER
# File:   scripts/run_ci_checks.py
# =============================================================================
#
# PURPOSE
# -------
# Runs full CI gate in two sequential stages:
#   Stage 1: pytest (unit + end-to-end tests, coverage report)
#   Stage 2: TAP self-test (usage_example.py run through the harness CLI)
#
# Exit codes:
#   0 -- All stages passed.
#   1 -- Stage 1 (pytest) failed.
#   2 -- Stage 2 (TAP self-test) failed.
#
# Usage:
#   python scripts/run_ci_checks.py
#
# No external dependencies beyond the test extra and the just_test package.
# =============================================================================

from __future__ import annotations

import pathlib
import subprocess
import sys
from typing import List, Tuple

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_REPO_ROOT = pathlib.Path(__file__).parent.parent
_PYTHON    = sys.executable

# (label, command, exit code returned on failure)
_STAGES: List[Tuple[str, List[str], int]] = [
    ("pytest", [_PYTHON, "-m", "pytest"], 1),
    ("tap", [_PYTHON, "-m", "just_test", "usage_example.py"], 2),
]


def _separator(char: str = "=", width: int = 72) -> str:
    return char * width


def _run(cmd: List[str], label: str) -> int:
    """
    Run a subprocess command, stream stdout/stderr live, return exit code.
    """
    print(_separator())
    print(f"CI STAGE: {label}")
    print(f"CMD:      {' '.join(cmd)}")
    print(_separator("-"))
    sys.stdout.flush()

    proc = subprocess.run(
        cmd,
        cwd=str(_REPO_ROOT),
    )
    return proc.returncode


def main() -> int:
    print(_separator())
    print("just_test CI GATE -- starting")
    print(_separator())
    sys.stdout.flush()

    for label, cmd, failure_code in _STAGES:
        rc = _run(cmd, label)
        if rc != 0:
            print(_separator())
            print(f"CI RESULT: FAIL  [stage={label}  exit_code={rc}]")
            print(f"Merge BLOCKED: {label} stage did not pass.")
            print(_separator())
            sys.stdout.flush()
            return failure_code

        print(_separator("-"))
        print(f"CI STAGE {label}: PASS")
        sys.stdout.flush()

    print(_separator())
    print("CI RESULT: PASS  [stages=" + ",".join(s[0] for s in _STAGES) + "]")
    print("Merge permitted.")
    print(_separator())
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
