# =============================================================================
# just_test/harness.py
# Harness -- test group runner, result counters and the final TAP summary.
# =============================================================================
#
# LIFECYCLE
# ---------
#   First run_group() call (or an explicit initialize()):
#     1. ErrorInterceptor.register()  -> shutdown callbacks: handle_fatal_error,
#                                        exit_on_error
#     2. group hook finishers         -> shutdown callbacks: hook.finish
#     3. emit_summary                 -> last shutdown callback
#   The order matters: a deferred fatal fault found at shutdown ends the
#   process before the summary is printed.
#
# COUNTERS
# --------
#   total == passed + failed after every record() call.
#   Result numbers are total after increment: 1, 2, 3, ... across all groups.
#
# EXIT CODE
# ---------
#   emit_summary() prints the plan and summary once, then calls exit_fn with
#   1 if any assertion failed or an earlier shutdown callback raised, else 0.
#   With the interceptor armed, a raising callback ends the process before
#   the summary (see error_handler.py, channel 2).
# =============================================================================

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Protocol, Tuple

from just_test.assertions import Test
from just_test.config import HarnessConfig, configure_logging
from just_test.data_models.assertion_result import AssertionResult, Diagnostics, Outcome
from just_test.error_handler import ErrorInterceptor
from just_test.exceptions import HarnessStateError, InvalidArgumentsError
from just_test.harness_version import EXIT_FAILURE, EXIT_OK
from just_test.shutdown import ShutdownSequence
from just_test.tap_writer import TapWriter

logger = logging.getLogger(__name__)

TestBody = Callable[[Test], Any]


class GroupHook(Protocol):
    """Collaborator wrapped around every non-skipped group body."""

    def around_group(self, name: Optional[str]) -> Any:
        """Return a context manager entered before and exited after the body."""

    def finish(self) -> None:
        """Called once at shutdown, before the summary."""


@dataclass
class HarnessState:
    """
    Aggregate counters for one harness.

    Fields:
      total           -- Assertions recorded so far. Never decremented.
      passed          -- Assertions that passed.
      failed          -- Assertions that failed.
      initialized     -- One-time installation done.
      summary_emitted -- Plan and summary already printed.
    """
    total:           int = 0
    passed:          int = 0
    failed:          int = 0
    initialized:     bool = False
    summary_emitted: bool = False

    def count(self, outcome: Outcome) -> int:
        """Count one assertion and return its result number."""
        if outcome is Outcome.PASS:
            self.passed += 1
        else:
            self.failed += 1
        self.total += 1
        return self.total

    @property
    def exit_code(self) -> int:
        return EXIT_FAILURE if self.failed > 0 else EXIT_OK


def _parse_group_args(args: Tuple[Any, ...]) -> Tuple[Optional[str], Mapping[str, Any], TestBody]:
    """Accept (body), (name, body) or (name, options, body)."""
    name: Optional[str] = None
    options: Optional[Mapping[str, Any]] = None
    if len(args) == 3:
        name, options, body = args
    elif len(args) == 2:
        name, body = args
    elif len(args) == 1:
        (body,) = args
    else:
        raise InvalidArgumentsError(f"expected 1 to 3 positional arguments, got {len(args)}")

    if not callable(body):
        raise InvalidArgumentsError("test body must be callable")
    if options is None:
        options = {}
    elif not isinstance(options, Mapping):
        raise InvalidArgumentsError("options must be a mapping")
    return name, options, body


class Harness:
    """
    Runs test groups and reports their assertions as TAP.

    One instance per process is the norm (see just_test.get_harness). Tests
    of the harness itself build private instances with injected streams,
    exit function and shutdown sequence.
    """

    def __init__(
        self,
        config:      Optional[HarnessConfig] = None,
        shutdown:    Optional[ShutdownSequence] = None,
        interceptor: Optional[ErrorInterceptor] = None,
    ):
        self.config = config if config is not None else HarnessConfig.from_env()
        self.state = HarnessState()
        self.writer = TapWriter(self.config.stdout, self.config.stderr)
        self.shutdown = shutdown if shutdown is not None else ShutdownSequence()
        if interceptor is None and self.config.intercept_errors:
            interceptor = ErrorInterceptor(self.writer, self.config.exit_fn)
        self.interceptor = interceptor
        self._hooks: List[GroupHook] = []

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def add_group_hook(self, hook: GroupHook) -> None:
        if self.state.initialized:
            raise HarnessStateError("group hooks must be added before the first test group runs")
        self._hooks.append(hook)

    def initialize(self) -> None:
        if self.state.initialized:
            return
        if self.config.log_level:
            configure_logging(self.config.log_level)
        if self.interceptor is not None:
            self.interceptor.register(self.shutdown)
        for hook in self._hooks:
            self.shutdown.register(hook.finish)
        self.shutdown.register(self.emit_summary)
        self.state.initialized = True
        logger.debug("harness initialized with %d group hook(s)", len(self._hooks))

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def run_group(self, *args: Any) -> None:
        """
        Run one test group: run_group([name, [options,]] body).

        options["skip"] truthy -> nothing is printed and body is not called.
        Exceptions raised by body are not caught here.
        """
        self.initialize()
        name, options, body = _parse_group_args(args)

        if options.get("skip"):
            logger.debug("group %r skipped", name)
            return

        if name:
            self.writer.comment(name)

        with ExitStack() as stack:
            for hook in self._hooks:
                stack.enter_context(hook.around_group(name))
            body(Test(self))

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def record(
        self,
        outcome:     Outcome,
        message:     Optional[str] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> AssertionResult:
        number = self.state.count(outcome)
        result = AssertionResult(
            number=number,
            outcome=outcome,
            message=message,
            diagnostics=diagnostics,
        )
        self.writer.result(result)
        return result

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def emit_summary(self) -> None:
        """Print the plan and summary once, then exit with the result code."""
        if self.state.summary_emitted:
            return
        self.state.summary_emitted = True
        self.writer.summary(self.state.total, self.state.passed, self.state.failed)
        code = self.state.exit_code
        if self.shutdown.errors:
            # A hook failed to finish; its traceback is already on stderr.
            code = EXIT_FAILURE
        self.config.exit_fn(code)


# ---------------------------------------------------------------------------
# Process-wide default harness
# ---------------------------------------------------------------------------

_default_harness: Optional[Harness] = None


def get_harness() -> Harness:
    """Return the process-wide harness, creating it from the environment on first use."""
    global _default_harness
    if _default_harness is None:
        _default_harness = Harness()
    return _default_harness


def test(*args: Any) -> None:
    """
    Run a test group on the process-wide harness.

        test(body)
        test("name", body)
        test("name", {"skip": True}, body)
    """
    get_harness().run_group(*args)


# Not a pytest test function.
test.__test__ = False  # type: ignore[attr-defined]
