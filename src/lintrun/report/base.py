"""Reporter protocol — how findings leave the runner."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol

from lintrun.scanner.models import Finding


class Reporter(Protocol):
    """Protocol for finding reporters.

    The runner calls report() once per linted file and once for a
    threshold breach with ``realtime=True``, then once with every
    finding and ``realtime=False``.
    """

    def report(self, findings: Sequence[Finding], realtime: bool) -> None:
        ...


class StreamingReporter(ABC):
    """Reporter that emits either the realtime calls or the final call, not both."""

    realtime: bool = True

    def report(self, findings: Sequence[Finding], realtime: bool) -> None:
        if realtime != self.realtime:
            return
        self.emit(findings)

    @abstractmethod
    def emit(self, findings: Sequence[Finding]) -> None:
        ...
