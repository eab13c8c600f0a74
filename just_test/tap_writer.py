# =============================================================================
# just_test/tap_writer.py
# TAP rendering and stream output.
# =============================================================================
#
# OUTPUT PROTOCOL (stdout)
# ------------------------
#   ok {n} {message}
#   not ok {n} {message}
#     ---
#       operator: {operator}
#       expected: {expected}        omitted when the assertion has no expected side
#       actual:   {actual}
#       at: {file}:{line}           omitted when no call site is known
#     ...
#   # {group name}
#
#   1..{total}
#   # tests {total}
#   # pass  {passed}
#   # fail  {failed}              or, when nothing failed:   <blank>, # ok
#
# FATAL PROTOCOL (stderr)
# -----------------------
#   not ok 0 error
#     ---
#       {text}
#     ...
#
# Every write is followed by flush() so streaming consumers see lines in order.
# The render_* functions are pure; TapWriter only adds the streams.
# =============================================================================

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from just_test.data_models.assertion_result import AssertionResult, Diagnostics
from just_test.harness_version import FATAL_RESULT_NUMBER
from just_test.values import format_value


def render_result(result: AssertionResult) -> str:
    line = f"{result.outcome.value} {result.number}"
    if result.message:
        line += f" {result.message}"
    text = line + "\n"
    if result.diagnostics is not None:
        text += render_diagnostics(result.diagnostics)
    return text


def render_diagnostics(diagnostics: Diagnostics) -> str:
    lines: List[str] = [
        "  ---",
        f"    operator: {diagnostics.operator}",
    ]
    if diagnostics.has_expected:
        lines.append(f"    expected: {format_value(diagnostics.expected)}")
    lines.append(f"    actual:   {format_value(diagnostics.actual)}")
    if diagnostics.at is not None:
        lines.append(f"    at: {diagnostics.at}")
    lines.append("  ...")
    return "\n".join(lines) + "\n"


def render_comment(text: str) -> str:
    return f"# {text}\n"


def render_summary(total: int, passed: int, failed: int) -> str:
    text = (
        "\n"
        f"1..{total}\n"
        f"# tests {total}\n"
        f"# pass  {passed}\n"
    )
    if failed > 0:
        text += f"# fail  {failed}\n\n"
    else:
        text += "\n# ok\n\n"
    return text


def render_fatal(text: str) -> str:
    return (
        f"not ok {FATAL_RESULT_NUMBER} error\n"
        "  ---\n"
        f"    {text}\n"
        "  ...\n"
    )


class TapWriter:
    """
    Writes rendered TAP to stdout and fatal records to stderr.

    Streams given as None resolve to the current sys.stdout / sys.stderr at
    each write, so redirection after construction is honoured.
    """

    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    @staticmethod
    def _emit(stream: TextIO, text: str) -> None:
        stream.write(text)
        stream.flush()

    def result(self, result: AssertionResult) -> None:
        self._emit(self.stdout, render_result(result))

    def comment(self, text: str) -> None:
        self._emit(self.stdout, render_comment(text))

    def summary(self, total: int, passed: int, failed: int) -> None:
        self._emit(self.stdout, render_summary(total, passed, failed))

    def fatal(self, text: str) -> None:
        # Anything already written to stdout must precede the fatal record.
        self.stdout.flush()
        self._emit(self.stderr, render_fatal(text))
