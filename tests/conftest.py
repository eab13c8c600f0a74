"""Shared fixtures for the just_test suite."""

from __future__ import annotations

import io
from pathlib import Path
from typing import List

import pytest

from just_test import Harness, HarnessConfig, ShutdownSequence

# Fixture scripts define test groups at import time; they are run in a
# subprocess by the end-to-end tests, never collected.
collect_ignore = ["fixtures"]


class ExitRecorder:
    """Stand-in for terminate(): records exit codes instead of exiting."""

    def __init__(self) -> None:
        self.codes: List[int] = []

    def __call__(self, code: int) -> None:
        self.codes.append(code)

    @property
    def last(self) -> int:
        return self.codes[-1]


@pytest.fixture
def exit_recorder() -> ExitRecorder:
    return ExitRecorder()


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def stderr() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def atexit_calls() -> list:
    """Callables the shutdown sequence handed to its registrar."""
    return []


@pytest.fixture
def shutdown(atexit_calls: list) -> ShutdownSequence:
    return ShutdownSequence(register_fn=atexit_calls.append)


@pytest.fixture
def harness(
    stdout: io.StringIO,
    stderr: io.StringIO,
    exit_recorder: ExitRecorder,
    shutdown: ShutdownSequence,
) -> Harness:
    """Harness on private streams, without the process-wide error interceptor."""
    config = HarnessConfig(
        stdout=stdout,
        stderr=stderr,
        exit_fn=exit_recorder,
        intercept_errors=False,
    )
    return Harness(config=config, shutdown=shutdown)


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def repo_root() -> Path:
    return Path(__file__).resolve().parent.parent
