# just_test/shutdown.py
# Ordered shutdown callbacks and process termination.
#
# atexit runs its handlers last-in first-out. The harness needs the
# opposite: the error interceptor's callbacks must run before the summary
# emitter so that a deferred fatal fault pre-empts the summary. The
# ShutdownSequence is therefore registered with atexit once and runs its
# own callbacks in registration order.
#
# A callback that raises does not stop the sequence: the exception goes to
# the error handler (the error interceptor, once armed) and the remaining
# callbacks still run. Without a handler the traceback is printed to stderr
# and the harness turns the recorded error into exit code 1.
#
# Single-threaded. Callbacks never overlap.

from __future__ import annotations

import atexit
import logging
import os
import sys
import traceback
from typing import Any, Callable, List, NoReturn, Optional

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[type, BaseException, Any], None]


def terminate(code: int) -> NoReturn:
    """
    Flush stdout and stderr, then end the process immediately with code.

    os._exit is used because a plain sys.exit raised from an atexit callback
    or from sys.excepthook cannot change the exit status, and because
    termination must not be catchable by any fault boundary.
    """
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()
    os._exit(code)


class ShutdownSequence:
    """
    Callbacks invoked in registration order at process end.

    The sequence hooks itself into the process exit machinery on the first
    register() call. run() executes each callback at most once per sequence.
    Exceptions raised by callbacks are kept in ``errors``.
    """

    def __init__(self, register_fn: Callable[[Callable[[], None]], object] = atexit.register):
        self._register_fn = register_fn
        self._callbacks: List[Callable[[], None]] = []
        self._errors: List[BaseException] = []
        self._error_handler: Optional[ErrorHandler] = None
        self._installed = False
        self._ran = False

    @property
    def callbacks(self) -> tuple:
        return tuple(self._callbacks)

    @property
    def errors(self) -> tuple:
        return tuple(self._errors)

    def set_error_handler(self, handler: Optional[ErrorHandler]) -> None:
        """handler(exc_type, exc_value, exc_tb), same signature as sys.excepthook."""
        self._error_handler = handler

    def register(self, callback: Callable[[], None]) -> None:
        if not self._installed:
            self._register_fn(self.run)
            self._installed = True
        self._callbacks.append(callback)

    def run(self) -> None:
        if self._ran:
            return
        self._ran = True
        for callback in list(self._callbacks):
            name = getattr(callback, "__qualname__", callback)
            logger.debug("shutdown callback %s", name)
            try:
                callback()
            except Exception as exc:
                self._errors.append(exc)
                self._report(exc)

    def _report(self, exc: Exception) -> None:
        if self._error_handler is not None:
            self._error_handler(type(exc), exc, exc.__traceback__)
            return
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        sys.stderr.flush()
