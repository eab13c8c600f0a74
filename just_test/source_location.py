# just_test/source_location.py
# Call-site capture for assertion diagnostics.

from __future__ import annotations

import inspect
import os
from typing import Optional

from just_test.data_models.assertion_result import SourceLocation

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _inside_package(filename: str) -> bool:
    return os.path.abspath(filename).startswith(_PACKAGE_DIR + os.sep)


def caller_location() -> Optional[SourceLocation]:
    """
    Return the file and line of the nearest frame outside the just_test
    package, i.e. the line in the test script that called the assertion.

    Returns None if the stack holds no such frame.
    """
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_code.co_filename
            if not _inside_package(filename):
                return SourceLocation(file=filename, line=frame.f_lineno)
            frame = frame.f_back
        return None
    finally:
        # Break the reference cycle between this frame and its locals.
        del frame
