# just_test/config.py
# Harness configuration and logging setup.
#
# Environment variables:
#   JUST_TEST_INTERCEPT  -- "0", "false", "no" or "off" disables the error
#                           interceptor. Any other value (or unset) enables it.
#   JUST_TEST_LOG_LEVEL  -- Level name for the just_test loggers (DEBUG, INFO,
#                           ...). Unset means the package stays silent.
#
# Log records are written to stderr only. Stdout carries the TAP stream and
# nothing else.

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TextIO

from just_test.shutdown import terminate

ENV_INTERCEPT: str = "JUST_TEST_INTERCEPT"
ENV_LOG_LEVEL: str = "JUST_TEST_LOG_LEVEL"

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

_LOG_FORMAT: str = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class HarnessConfig:
    """
    Runtime configuration for a Harness.

    Fields:
      stdout           -- Stream for TAP results. None means the current
                          sys.stdout at write time.
      stderr           -- Stream for fatal diagnostics. None means the
                          current sys.stderr at write time.
      exit_fn          -- Called with the final exit code. Must not return
                          in production; tests inject a recorder.
      intercept_errors -- Install the error interceptor on initialization.
      log_level        -- Level name passed to configure_logging(), or None.
    """
    stdout:           Optional[TextIO] = None
    stderr:           Optional[TextIO] = None
    exit_fn:          Callable[[int], None] = terminate
    intercept_errors: bool = True
    log_level:        Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HarnessConfig":
        env = os.environ if environ is None else environ
        intercept = env.get(ENV_INTERCEPT, "1").strip().lower() not in _FALSE_VALUES
        log_level = env.get(ENV_LOG_LEVEL) or None
        return cls(intercept_errors=intercept, log_level=log_level)


def configure_logging(level: str, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a stderr handler to the just_test package logger at level.

    Raises ValueError for an unknown level name.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    package_logger = logging.getLogger("just_test")
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric)
    return package_logger
