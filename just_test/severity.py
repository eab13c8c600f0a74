# just_test/severity.py
# Fault severity codes, their rendered labels, and the classification of
# Python warnings and exceptions into those codes.
#
# The label table is closed: any code not listed renders as "Unknown error".
# Only "Fatal error" is escalated by the deferred (shutdown-time) check in
# error_handler.ErrorInterceptor.handle_fatal_error.

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple, Type


class Severity(IntEnum):
    """Severity codes. Bit values so that callers may combine them as masks."""

    ERROR             = 1
    WARNING           = 2
    PARSE             = 4
    NOTICE            = 8
    CORE_ERROR        = 16
    CORE_WARNING      = 32
    COMPILE_ERROR     = 64
    COMPILE_WARNING   = 128
    USER_ERROR        = 256
    USER_WARNING      = 512
    USER_NOTICE       = 1024
    STRICT            = 2048
    RECOVERABLE_ERROR = 4096
    DEPRECATED        = 8192
    USER_DEPRECATED   = 16384


FATAL_ERROR_LABEL: str = "Fatal error"
UNKNOWN_ERROR_LABEL: str = "Unknown error"

_LABELS: Dict[int, str] = {
    Severity.ERROR:             FATAL_ERROR_LABEL,
    Severity.CORE_ERROR:        FATAL_ERROR_LABEL,
    Severity.COMPILE_ERROR:     FATAL_ERROR_LABEL,
    Severity.USER_ERROR:        FATAL_ERROR_LABEL,
    Severity.RECOVERABLE_ERROR: "Catchable fatal error",
    Severity.WARNING:           "Warning",
    Severity.CORE_WARNING:      "Warning",
    Severity.COMPILE_WARNING:   "Warning",
    Severity.USER_WARNING:      "Warning",
    Severity.PARSE:             "Parse error",
    Severity.NOTICE:            "Notice",
    Severity.USER_NOTICE:       "Notice",
    Severity.STRICT:            "Strict standards",
    Severity.DEPRECATED:        "Deprecated",
    Severity.USER_DEPRECATED:   "Deprecated",
}

# Ordered: the first matching base class wins, so subclasses come first.
_WARNING_SEVERITIES: Tuple[Tuple[Type[Warning], Severity], ...] = (
    (DeprecationWarning,        Severity.DEPRECATED),
    (PendingDeprecationWarning, Severity.DEPRECATED),
    (FutureWarning,             Severity.USER_DEPRECATED),
    (SyntaxWarning,             Severity.COMPILE_WARNING),
    (ImportWarning,             Severity.CORE_WARNING),
    (ResourceWarning,           Severity.NOTICE),
    (BytesWarning,              Severity.STRICT),
    (UnicodeWarning,            Severity.STRICT),
    (EncodingWarning,           Severity.STRICT),
    (UserWarning,               Severity.USER_WARNING),
)

_FATAL_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    MemoryError,
    RecursionError,
    SystemError,
)


def label_for(severity: int) -> str:
    """Return the rendered label for a severity code."""
    return _LABELS.get(severity, UNKNOWN_ERROR_LABEL)


def is_fatal(severity: int) -> bool:
    return label_for(severity) == FATAL_ERROR_LABEL


def severity_for_warning(category: Type[Warning]) -> Severity:
    """
    Classify a warning category.

    Categories that are not a subclass of any known base (including plain
    RuntimeWarning and Warning itself) are ordinary warnings.
    """
    for base, severity in _WARNING_SEVERITIES:
        if isinstance(category, type) and issubclass(category, base):
            return severity
    return Severity.WARNING


def severity_for_exception(exc: BaseException) -> Severity:
    """
    Classify an exception observed outside normal dispatch.

    SyntaxError                               -> PARSE
    MemoryError, RecursionError, SystemError  -> ERROR
    any other Exception                       -> RECOVERABLE_ERROR
    any other BaseException                   -> USER_ERROR
    """
    if isinstance(exc, SyntaxError):
        return Severity.PARSE
    if isinstance(exc, _FATAL_EXCEPTIONS):
        return Severity.ERROR
    if isinstance(exc, Exception):
        return Severity.RECOVERABLE_ERROR
    return Severity.USER_ERROR
