# tests/test_end_to_end.py
# Whole-process behaviour: fixture scripts run in a fresh interpreter so the
# real shutdown sequence, error interceptor and exit status are exercised.

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict

import pytest


# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------

def _clean_env(repo_root: Path) -> Dict[str, str]:
    env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith(("COV_CORE", "JUST_TEST_", "PYTHONWARNINGS"))
    }
    env["PYTHONPATH"] = str(repo_root)
    return env


@pytest.fixture
def run(repo_root: Path, fixtures_dir: Path):
    def _run(*args: str, module: bool = False, env: Dict[str, str] = None):
        if module:
            command = [sys.executable, "-m", "just_test", *args]
        else:
            (script,) = args
            command = [sys.executable, str(fixtures_dir / script)]
        full_env = _clean_env(repo_root)
        full_env.update(env or {})
        return subprocess.run(
            command,
            cwd=str(fixtures_dir),
            env=full_env,
            capture_output=True,
            text=True,
            timeout=60,
        )
    return _run


def _fatal_records(stderr: str) -> int:
    return stderr.count("not ok 0 error\n  ---\n")


# ---------------------------------------------------------------------------
# NORMAL RUNS
# ---------------------------------------------------------------------------

class TestCanonicalScript:

    def test_summary_and_exit_code(self, run) -> None:
        proc = run("some_tests.py")
        assert proc.returncode == 1
        assert proc.stdout.endswith("\n1..14\n# tests 14\n# pass  7\n# fail  7\n\n")
        assert proc.stderr == ""

    def test_results_and_comments(self, run) -> None:
        lines = run("some_tests.py").stdout.splitlines()
        assert lines[0] == "# ok does the proper checks"
        assert lines[1] == "not ok 1 false cannot be okay, okay"
        assert "ok 2 true should be okay" in lines
        assert "ok 3 all good" in lines
        assert "not ok 4 such a good fail" in lines
        assert "not ok 14 should fail" in lines

    def test_throws_failure_block(self, run) -> None:
        stdout = run("some_tests.py").stdout
        assert (
            "not ok 7 you should have thrown an exception bruv\n"
            "  ---\n"
            "    operator: throws\n"
            "    expected: Exception\n"
            "    actual:   null\n"
        ) in stdout

    def test_does_not_throw_failure_block(self, run) -> None:
        stdout = run("some_tests.py").stdout
        assert (
            "not ok 10 you shouldn't have thrown an exception mate\n"
            "  ---\n"
            "    operator: doesNotThrow\n"
            "    actual:   exception 'Exception' with message 'Aww yea'\n"
            "    at: "
        ) in stdout


class TestPassingAndEmpty:

    def test_all_passing_exits_zero(self, run) -> None:
        proc = run("all_passing.py")
        assert proc.returncode == 0
        assert "never runs" not in proc.stdout
        assert proc.stdout.endswith("\n1..3\n# tests 3\n# pass  3\n\n# ok\n\n")

    def test_empty_run_via_cli(self, run) -> None:
        proc = run("empty.py", module=True)
        assert proc.returncode == 0
        assert proc.stdout == "\n1..0\n# tests 0\n# pass  0\n\n# ok\n\n"

    def test_cli_scripts_share_numbering(self, run) -> None:
        proc = run("all_passing.py", "some_tests.py", module=True)
        assert proc.returncode == 1
        assert "not ok 4 false cannot be okay, okay" in proc.stdout
        assert proc.stdout.count("\n1..") == 1
        assert "# tests 17\n# pass  10\n# fail  7\n" in proc.stdout

    def test_usage_example_passes(self, run, repo_root) -> None:
        proc = run(str(repo_root / "usage_example.py"), module=True)
        assert proc.returncode == 0
        assert "# tests 9\n# pass  9\n" in proc.stdout

    def test_cli_missing_script(self, run) -> None:
        proc = run("does_not_exist.py", module=True)
        assert proc.returncode == 2
        assert proc.stdout == ""

    def test_interception_can_be_disabled(self, run) -> None:
        proc = run("all_passing.py", env={"JUST_TEST_INTERCEPT": "0"})
        assert proc.returncode == 0


# ---------------------------------------------------------------------------
# RUNTIME FAULTS
# ---------------------------------------------------------------------------

class TestRuntimeFaults:

    def test_warning_ends_run(self, run, fixtures_dir) -> None:
        proc = run("fatal_warning.py")
        assert proc.returncode == 1
        assert proc.stdout == "# warning mid-group\nok 1 before the warning\n"
        assert _fatal_records(proc.stderr) == 1
        assert "    Warning: disk almost full in " in proc.stderr
        assert "fatal_warning.py on line 8\n" in proc.stderr

    def test_warning_inside_throws_is_not_swallowed(self, run) -> None:
        proc = run("warning_in_throws.py")
        assert proc.returncode == 1
        assert "1.." not in proc.stdout
        assert "ok 1" not in proc.stdout
        assert _fatal_records(proc.stderr) == 1
        assert "    Deprecated: old API in " in proc.stderr

    def test_uncaught_exception_prints_traceback(self, run) -> None:
        proc = run("uncaught_exception.py")
        assert proc.returncode == 1
        assert proc.stdout == "# uncaught\nok 1 first\n"
        assert _fatal_records(proc.stderr) == 1
        assert "    Traceback (most recent call last):\n" in proc.stderr
        assert proc.stderr.endswith("    KeyError: 'missing-key'\n  ...\n")

    def test_uncaught_exception_via_cli(self, run) -> None:
        proc = run("uncaught_exception.py", module=True)
        assert proc.returncode == 1
        assert "1.." not in proc.stdout
        assert _fatal_records(proc.stderr) == 1

    def test_deferred_fatal_fault_pre_empts_summary(self, run) -> None:
        proc = run("deferred_fatal.py")
        assert proc.returncode == 1
        assert "1.." not in proc.stdout
        assert "ok 1 before the finalizer" in proc.stdout
        assert _fatal_records(proc.stderr) == 1
        assert "    Fatal error: MemoryError: finalizer ran out of memory in " in proc.stderr

    def test_deferred_recoverable_fault_is_ignored(self, run) -> None:
        proc = run("deferred_recoverable.py")
        assert proc.returncode == 0
        assert proc.stdout.endswith("\n1..1\n# tests 1\n# pass  1\n\n# ok\n\n")
        assert proc.stderr == ""

    def test_thread_exception_ends_run(self, run) -> None:
        proc = run("thread_exception.py")
        assert proc.returncode == 1
        assert "1.." not in proc.stdout
        assert _fatal_records(proc.stderr) == 1
        assert proc.stderr.endswith("    ZeroDivisionError: division by zero\n  ...\n")


class TestFailingHooks:

    def test_hook_failing_to_finish_exits_one(self, run) -> None:
        proc = run("failing_hook.py")
        assert proc.returncode == 1
        assert "ok 1 the hook still has to finish" in proc.stdout
        assert "1.." not in proc.stdout
        assert _fatal_records(proc.stderr) == 1
        assert "    OSError: report directory is read-only\n" in proc.stderr

    def test_without_interceptor_summary_is_printed_and_exit_is_one(self, run) -> None:
        proc = run("failing_hook.py", env={"JUST_TEST_INTERCEPT": "0"})
        assert proc.returncode == 1
        assert proc.stdout.endswith("\n1..1\n# tests 1\n# pass  1\n\n# ok\n\n")
        assert "OSError: report directory is read-only" in proc.stderr
