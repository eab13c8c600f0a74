# =============================================================================
# just_test/exceptions.py
# Exception hierarchy for harness misuse.
# =============================================================================
#
# EXCEPTION HIERARCHY
# -------------------
#   HarnessError(Exception)                           -- base; never raised directly
#     InvalidArgumentsError(HarnessError, ValueError) -- bad test() arguments
#     HarnessStateError(HarnessError, RuntimeError)   -- operation in wrong state
#
# These are raised to the caller of the harness API. They are never converted
# into TAP records by the harness itself; if one escapes a test script it
# reaches the error interceptor like any other uncaught exception.
#
# MESSAGE CONTRACT
# ----------------
# Every message is non-empty and derived only from constructor arguments.
# =============================================================================

from __future__ import annotations


class HarnessError(Exception):
    """
    Base class for all harness exceptions.

    Attributes:
        message: Human-readable description. Always non-empty.
    """

    def __init__(self, message: str) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError("HarnessError: message must be a non-empty string")
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return self.__class__.__name__ + "(message=" + repr(self.message) + ")"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HarnessError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    __hash__ = Exception.__hash__


class InvalidArgumentsError(HarnessError, ValueError):
    """
    Raised when test() / Harness.run_group() receives an unsupported call shape.

    Accepted shapes are (body), (name, body) and (name, options, body), where
    body is callable and options is a mapping.
    """

    def __init__(self, detail: str = "") -> None:
        message = "Invalid arguments"
        if detail:
            message += ": " + detail
        super().__init__(message)
        self.detail: str = detail


class HarnessStateError(HarnessError, RuntimeError):
    """Raised when an operation is not allowed in the harness's current state."""
