# just_test/fault_boundary.py
# Local fault boundary for Test.throws / Test.does_not_throw.
#
# Converts an exception raised by a zero-argument callable into a
# CapturedException value. Only Exception subclasses are captured;
# SystemExit, KeyboardInterrupt and other BaseException subclasses pass
# through, as does interceptor termination (which is not an exception).

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapturedException:
    """
    Description of an exception caught by the fault boundary.

    Fields:
      kind    -- Exception class name.
      message -- str() of the exception.
    """
    kind:    str
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "CapturedException":
        return cls(kind=type(exc).__name__, message=str(exc))

    def render(self) -> str:
        return f"exception '{self.kind}' with message '{self.message}'"

    def matches(self, pattern: Union[str, Pattern[str]]) -> bool:
        """True iff the rendered description contains a match for pattern."""
        return re.search(pattern, self.render()) is not None

    def __str__(self) -> str:
        return self.render()


def capture(func: Callable[[], object]) -> Optional[CapturedException]:
    """
    Call func() once. Return None if it returned, or the captured exception.
    """
    try:
        func()
    except Exception as exc:
        captured = CapturedException.from_exception(exc)
        logger.debug("fault boundary captured %s", captured)
        return captured
    return None
