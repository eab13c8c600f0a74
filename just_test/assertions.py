# just_test/assertions.py
# Test -- the assertion context handed to each test group body.
#
# A Test holds no counters of its own. Every assertion is recorded through
# the owning Harness, which numbers it, counts it and prints it at once.
# Contexts from different groups therefore share one numbering sequence.
#
# Operator names in diagnostics: ok, notOk, equals, notEquals, throws,
# doesNotThrow.

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Pattern, Union

from just_test.data_models.assertion_result import (
    ABSENT,
    AssertionResult,
    Diagnostics,
    Outcome,
    SourceLocation,
)
from just_test.fault_boundary import capture
from just_test.source_location import caller_location
from just_test.values import loosely_equal

if TYPE_CHECKING:
    from just_test.harness import Harness


class Test:
    """
    Assertion methods for one test group.

    Every assertion returns the AssertionResult it recorded. Failed
    assertions carry Diagnostics whose "at" is the caller's file and line,
    unless an explicit SourceLocation is passed as ``at``.
    """

    # Keeps pytest from collecting this class when imported into test modules.
    __test__ = False

    def __init__(self, harness: "Harness"):
        self._harness = harness

    def pass_(self, message: Optional[str] = None) -> AssertionResult:
        """Record an unconditional pass. Trailing underscore: ``pass`` is a keyword."""
        return self._harness.record(Outcome.PASS, message)

    def fail(
        self,
        message: Optional[str] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> AssertionResult:
        if diagnostics is not None and diagnostics.at is None:
            diagnostics = replace(diagnostics, at=caller_location())
        return self._harness.record(Outcome.FAIL, message, diagnostics)

    def _check(
        self,
        passed:   bool,
        message:  Optional[str],
        operator: str,
        actual:   Any,
        expected: Any,
        at:       Optional[SourceLocation],
    ) -> AssertionResult:
        if passed:
            return self.pass_(message)
        return self.fail(
            message,
            Diagnostics(
                operator=operator,
                actual=actual,
                expected=expected,
                at=at if at is not None else caller_location(),
            ),
        )

    def ok(
        self,
        value: Any,
        message: Optional[str] = None,
        at: Optional[SourceLocation] = None,
    ) -> AssertionResult:
        """Pass iff value is True. Truthy values such as 1 or "true" fail."""
        return self._check(value is True, message, "ok", value, True, at)

    def not_ok(
        self,
        value: Any,
        message: Optional[str] = None,
        at: Optional[SourceLocation] = None,
    ) -> AssertionResult:
        """Pass iff value is False. Falsy values such as 0 or None fail."""
        return self._check(value is False, message, "notOk", value, False, at)

    def equals(
        self,
        actual: Any,
        expected: Any,
        message: Optional[str] = None,
        at: Optional[SourceLocation] = None,
    ) -> AssertionResult:
        """Pass iff actual loosely equals expected (1 == "1")."""
        return self._check(
            loosely_equal(actual, expected), message, "equals", actual, expected, at,
        )

    def not_equals(
        self,
        actual: Any,
        expected: Any,
        message: Optional[str] = None,
        at: Optional[SourceLocation] = None,
    ) -> AssertionResult:
        # Only the actual side is reported on failure.
        return self._check(
            not loosely_equal(actual, expected), message, "notEquals", actual, ABSENT, at,
        )

    def throws(
        self,
        func: Callable[[], object],
        expected: Union[str, Pattern[str]],
        message: Optional[str] = None,
        at: Optional[SourceLocation] = None,
    ) -> AssertionResult:
        """
        Pass iff func() raises an Exception whose description matches expected.

        The description reads "exception '<ClassName>' with message '<str>'"
        and is searched with re.search, so expected need not match from the
        start.
        """
        captured = capture(func)
        passed = captured is not None and captured.matches(expected)
        actual = captured.render() if captured is not None else None
        return self._check(passed, message, "throws", actual, expected, at)

    def does_not_throw(
        self,
        func: Callable[[], object],
        message: Optional[str] = None,
        at: Optional[SourceLocation] = None,
    ) -> AssertionResult:
        captured = capture(func)
        actual = captured.render() if captured is not None else None
        return self._check(captured is None, message, "doesNotThrow", actual, ABSENT, at)
