# just_test/data_models/assertion_result.py
# AssertionResult, Diagnostics and SourceLocation data classes.
#
# A result is produced by Harness.record(), rendered immediately by the
# TapWriter and handed back to the caller. The harness keeps no history of
# results beyond its aggregate counters.

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class _Absent:
    """Marker for a diagnostic field that was not supplied at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


# Distinct from None: None is a legitimate expected value and renders as
# "null"; ABSENT suppresses the "expected:" line entirely.
ABSENT = _Absent()


class Outcome(str, Enum):
    """Assertion outcome. The value is the TAP status keyword."""

    PASS = "ok"
    FAIL = "not ok"


@dataclass(frozen=True)
class SourceLocation:
    """
    File and line of an assertion call site.

    Rendered as "file:line" in the "at:" field of a diagnostic block.
    """
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class Diagnostics:
    """
    Failure details printed beneath a "not ok" line.

    Fields:
      operator -- Name of the assertion that failed (ok, notOk, equals, ...).
      actual   -- Value observed.
      expected -- Value required. ABSENT when the assertion has no expected
                  side (notEquals, doesNotThrow).
      at       -- Call site of the failing assertion, if known.
    """
    operator: str
    actual:   Any = None
    expected: Any = ABSENT
    at:       Optional[SourceLocation] = None

    @property
    def has_expected(self) -> bool:
        return self.expected is not ABSENT


@dataclass(frozen=True)
class AssertionResult:
    """
    Outcome of a single assertion.

    Fields:
      number      -- Process-wide result number. Starts at 1, increases by 1.
      outcome     -- Outcome.PASS or Outcome.FAIL.
      message     -- Free-text description supplied by the test author.
      diagnostics -- Present only on failures that carry details.
    """
    number:      int
    outcome:     Outcome
    message:     Optional[str] = None
    diagnostics: Optional[Diagnostics] = None

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASS
