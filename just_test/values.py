# just_test/values.py
# Value rendering for diagnostic blocks and the loose equality used by
# Test.equals / Test.not_equals.
#
# Pure functions. No I/O, no state.

from __future__ import annotations

import json
import math
import re
from numbers import Number
from typing import Any, Optional

from just_test.data_models.assertion_result import ABSENT


def format_value(value: Any) -> str:
    """
    Render a value for the "expected:" / "actual:" fields.

      True / False      -> "true" / "false"
      None, ABSENT      -> "null"
      dict, list, tuple -> compact JSON; non-JSON members fall back to repr(),
                           and so does the whole container when JSON cannot
                           express it (non-string keys, cycles)
      compiled pattern  -> the pattern source
      anything else     -> str(value)
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None or value is ABSENT:
        return "null"
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, separators=(",", ":"), default=repr)
        except (TypeError, ValueError):
            # Non-string keys or a reference cycle.
            return repr(value)
    if isinstance(value, re.Pattern):
        return value.pattern
    return str(value)


def _as_number(value: Any) -> Optional[float]:
    """Return the numeric value of a number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Number):
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        # "nan" / "inf" spelled out are words, not numeric strings.
        if not math.isfinite(number) and not any(ch.isdigit() for ch in text):
            return None
        return number
    return None


def _truthy(value: Any) -> bool:
    # "0" is falsy next to a bool, like "". "0.0" and " 0" are not.
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def loosely_equal(actual: Any, expected: Any) -> bool:
    """
    Coercive equality.

    Rules, first match wins:
      1. actual == expected                       -> equal
      2. either side is a bool                    -> compare truthiness;
                                                     the string "0" is falsy
      3. either side is None                      -> equal iff the other is falsy
      4. number vs numeric string, or two numeric
         strings ("1e3" vs "1000")                -> compare as numbers
      5. otherwise                                -> not equal
    """
    if actual == expected:
        return True

    if isinstance(actual, bool) or isinstance(expected, bool):
        return _truthy(actual) == _truthy(expected)

    if actual is None:
        return not expected
    if expected is None:
        return not actual

    if isinstance(actual, str) or isinstance(expected, str):
        left = _as_number(actual)
        right = _as_number(expected)
        if left is not None and right is not None:
            return left == right

    return False
