# just_test/__init__.py
# Minimal TAP test harness.
# Harness Version: 1.0.0
#
# USAGE (in a test script):
#   from just_test import test
#
#   test("addition", lambda t: t.equals(1 + 1, 2, "adds"))
#
# Results stream to stdout as TAP. The plan and summary are printed when the
# process exits; the exit code is 1 if any assertion failed or any runtime
# fault was intercepted, else 0.
#
# ENTRY POINT:
#   python -m just_test script.py [script.py ...]

import logging

from .harness_version import HARNESS_VERSION, EXIT_OK, EXIT_FAILURE
from .assertions import Test
from .config import HarnessConfig, configure_logging
from .coverage_hook import CoverageHook
from .data_models.assertion_result import (
    ABSENT,
    AssertionResult,
    Diagnostics,
    Outcome,
    SourceLocation,
)
from .error_handler import ErrorInterceptor
from .exceptions import HarnessError, HarnessStateError, InvalidArgumentsError
from .harness import Harness, HarnessState, get_harness, test
from .severity import Severity, label_for
from .shutdown import ShutdownSequence, terminate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = HARNESS_VERSION

__all__ = [
    # Version constants
    "HARNESS_VERSION",
    "EXIT_OK",
    "EXIT_FAILURE",
    # Group entry points
    "test",
    "get_harness",
    "Harness",
    "HarnessState",
    "Test",
    # Results
    "ABSENT",
    "AssertionResult",
    "Diagnostics",
    "Outcome",
    "SourceLocation",
    # Runtime faults
    "ErrorInterceptor",
    "Severity",
    "label_for",
    # Process lifecycle
    "ShutdownSequence",
    "terminate",
    # Configuration
    "HarnessConfig",
    "configure_logging",
    "CoverageHook",
    # Exceptions
    "HarnessError",
    "HarnessStateError",
    "InvalidArgumentsError",
]
