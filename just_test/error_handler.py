# =============================================================================
# just_test/error_handler.py
# ErrorInterceptor -- converts runtime faults into a terminal TAP record.
# =============================================================================
#
# CHANNELS
# --------
#   1. Warnings            warnings.showwarning  -> handle_warning    (immediate)
#   2. Uncaught exceptions sys.excepthook,
#                          threading.excepthook,
#                          shutdown callbacks    -> handle_exception  (immediate)
#   3. Deferred faults     sys.unraisablehook    -> recorded in last_fault;
#                          handle_fatal_error inspects it at shutdown and
#                          acts only on severities labelled "Fatal error".
#   4. Exit enforcement    exit_on_error at shutdown: exit 1 if any fault
#                          was handled.
#
# An immediate fault writes one "not ok 0 error" record to stderr and ends
# the process with exit code 1. The harness summary is never printed after
# that. Termination goes through exit_fn, not through a raised exception,
# so no try/except in a test body (or in Test.throws) can intercept it.
#
# STATE MACHINE
# -------------
#   IDLE --register()--> ARMED --first reported fault--> TRIPPED
#   TRIPPED is terminal. Faults reported while TRIPPED print nothing.
# =============================================================================

from __future__ import annotations

import logging
import sys
import threading
import traceback
import warnings
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Type

from just_test.data_models.fault_record import FaultRecord
from just_test.harness_version import EXIT_FAILURE
from just_test.severity import severity_for_exception, severity_for_warning
from just_test.shutdown import ShutdownSequence, terminate
from just_test.tap_writer import TapWriter

logger = logging.getLogger(__name__)

_UNKNOWN_FILE: str = "unknown"


class InterceptorState(str, Enum):
    IDLE    = "IDLE"
    ARMED   = "ARMED"
    TRIPPED = "TRIPPED"


def _fault_origin(exc: Optional[BaseException]) -> Tuple[str, int]:
    """File and line of the innermost traceback frame of exc."""
    if exc is None or exc.__traceback__ is None:
        return _UNKNOWN_FILE, 0
    frame = traceback.extract_tb(exc.__traceback__)[-1]
    return frame.filename, frame.lineno or 0


def render_exception(
    exc_type: Type[BaseException],
    exc_value: BaseException,
    exc_tb: Any,
) -> str:
    """Full traceback text with continuation lines indented for the TAP block."""
    text = "".join(traceback.format_exception(exc_type, exc_value, exc_tb)).rstrip("\n")
    return text.replace("\n", "\n    ")


class ErrorInterceptor:
    """
    Process-wide fault hooks.

    Construct once, call register() before any test group runs. register()
    is idempotent.
    """

    def __init__(
        self,
        writer:  Optional[TapWriter] = None,
        exit_fn: Callable[[int], None] = terminate,
    ):
        self._writer       = writer if writer is not None else TapWriter()
        self._exit_fn      = exit_fn
        self._state        = InterceptorState.IDLE
        self._handled      = False
        self._last_fault: Optional[FaultRecord] = None
        self._previous: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> InterceptorState:
        return self._state

    @property
    def handled_error(self) -> bool:
        return self._handled

    @property
    def last_fault(self) -> Optional[FaultRecord]:
        return self._last_fault

    # ------------------------------------------------------------------
    # Installation
    # ------------------------------------------------------------------

    def register(self, shutdown: ShutdownSequence) -> None:
        if self._state is not InterceptorState.IDLE:
            return

        self._previous = {
            "showwarning":  warnings.showwarning,
            "excepthook":   sys.excepthook,
            "unraisable":   sys.unraisablehook,
            "thread_hook":  threading.excepthook,
        }

        # Every warning reaches handle_warning; the default printer is gone.
        warnings.simplefilter("always")
        warnings.showwarning = self.handle_warning
        sys.excepthook = self.handle_exception
        sys.unraisablehook = self.handle_unraisable
        threading.excepthook = self.handle_thread_exception

        shutdown.set_error_handler(self.handle_exception)
        shutdown.register(self.handle_fatal_error)
        shutdown.register(self.exit_on_error)

        self._state = InterceptorState.ARMED
        logger.debug("error interceptor armed")

    def unregister(self) -> None:
        """Restore the hooks replaced by register(). Used by embedding code and tests."""
        if not self._previous:
            return
        warnings.showwarning = self._previous["showwarning"]
        sys.excepthook = self._previous["excepthook"]
        sys.unraisablehook = self._previous["unraisable"]
        threading.excepthook = self._previous["thread_hook"]
        self._previous = {}

    # ------------------------------------------------------------------
    # Channel 1 and the common reporting path
    # ------------------------------------------------------------------

    def handle_error(self, severity: int, message: str, file: str, line: int) -> None:
        self._handled = True
        record = FaultRecord(severity=severity, message=message, file=file, line=line)
        self._trip(record.render())

    def handle_warning(
        self,
        message:  Any,
        category: Type[Warning],
        filename: str,
        lineno:   int,
        file:     Any = None,
        line:     Optional[str] = None,
    ) -> None:
        """warnings.showwarning replacement."""
        self.handle_error(severity_for_warning(category), str(message), filename, lineno)

    # ------------------------------------------------------------------
    # Channel 2
    # ------------------------------------------------------------------

    def handle_exception(
        self,
        exc_type:  Type[BaseException],
        exc_value: BaseException,
        exc_tb:    Any,
    ) -> None:
        """sys.excepthook replacement."""
        self._handled = True
        self._trip(render_exception(exc_type, exc_value, exc_tb))

    def handle_thread_exception(self, args: Any) -> None:
        """threading.excepthook replacement. Same path as an uncaught exception."""
        if args.exc_type is SystemExit:
            return
        self.handle_exception(args.exc_type, args.exc_value, args.exc_traceback)

    # ------------------------------------------------------------------
    # Channel 3
    # ------------------------------------------------------------------

    def record_fault(self, exc: BaseException) -> FaultRecord:
        """Remember exc as the last deferred fault without reporting it."""
        file, line = _fault_origin(exc)
        record = FaultRecord(
            severity=severity_for_exception(exc),
            message=f"{type(exc).__name__}: {exc}",
            file=file,
            line=line,
        )
        self._last_fault = record
        logger.debug("deferred fault recorded: %s", record.render())
        return record

    def handle_unraisable(self, unraisable: Any) -> None:
        """sys.unraisablehook replacement."""
        if unraisable.exc_value is not None:
            self.record_fault(unraisable.exc_value)

    def handle_fatal_error(self) -> None:
        """Shutdown callback: escalate a deferred fault labelled "Fatal error"."""
        fault = self._last_fault
        if fault is None:
            return
        if not fault.is_fatal:
            logger.debug("deferred fault ignored at shutdown: %s", fault.label)
            return
        self.handle_error(fault.severity, fault.message, fault.file, fault.line)

    # ------------------------------------------------------------------
    # Channel 4
    # ------------------------------------------------------------------

    def exit_on_error(self) -> None:
        """Shutdown callback: force exit 1 if any fault was handled."""
        if self._handled:
            self._exit_fn(EXIT_FAILURE)

    # ------------------------------------------------------------------
    # Terminal transition
    # ------------------------------------------------------------------

    def _trip(self, text: str) -> None:
        if self._state is InterceptorState.TRIPPED:
            return
        self._state = InterceptorState.TRIPPED
        self._writer.fatal(text)
        self._exit_fn(EXIT_FAILURE)
