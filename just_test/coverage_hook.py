# just_test/coverage_hook.py
# Optional coverage collaborator for the harness.
#
# Starts a coverage.py collector around each test group, labels the
# collected lines with the group name as a dynamic context, and saves the
# data file at shutdown. Report generation is left to `coverage report`
# / `coverage html` run afterwards.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE: str = ".coverage"


def create_collector(data_file: str = DEFAULT_DATA_FILE) -> Any:
    """Build a coverage.Coverage collector. coverage is imported here so
    that harness runs without --coverage never load it."""
    import coverage

    return coverage.Coverage(data_file=data_file)


class CoverageHook:
    """
    Group hook driving a coverage collector.

    Any object with start(), stop(), switch_context(name) and save() works
    as the collector; by default a coverage.Coverage is created.
    """

    def __init__(self, collector: Optional[Any] = None, data_file: str = DEFAULT_DATA_FILE):
        self._collector = collector if collector is not None else create_collector(data_file)
        self._groups = 0

    @property
    def groups_measured(self) -> int:
        return self._groups

    @contextmanager
    def around_group(self, name: Optional[str]) -> Iterator[None]:
        self._collector.start()
        if name:
            self._collector.switch_context(name)
        try:
            yield
        finally:
            self._collector.stop()
            self._groups += 1

    def finish(self) -> None:
        self._collector.save()
        logger.debug("coverage data saved for %d group(s)", self._groups)
