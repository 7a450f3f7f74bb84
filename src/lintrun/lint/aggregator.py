"""Aggregator — the one place worker threads mutate run-wide state."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping

from lintrun.lint.benchmark import Benchmark
from lintrun.scanner.models import Finding


class Aggregator:
    """Append-only finding list plus the file and rule benchmarks.

    Every mutation and read goes through one lock. Callers do the slow
    work (running rules, severity policy, baseline filter) before calling
    merge() so the critical section stays a list extend and a few dict
    updates.
    """

    def __init__(self, benchmark: bool = False) -> None:
        self._findings: list[Finding] = []
        self._suppressed: list[Finding] = []
        self._files_merged = 0
        self._lock = threading.Lock()
        self.file_benchmark: Benchmark | None = Benchmark("files") if benchmark else None
        self.rule_benchmark: Benchmark | None = Benchmark("rules") if benchmark else None

    def merge(
        self,
        findings: Iterable[Finding],
        *,
        suppressed: Iterable[Finding] = (),
        file_sample: tuple[str, float] | None = None,
        rule_times: Mapping[str, float] | None = None,
    ) -> None:
        """Fold one file's results into the run.

        ``file_sample`` is (file path, elapsed seconds); ``rule_times``
        maps rule identifier to elapsed seconds. Both are ignored when
        benchmarking is off.
        """
        findings = list(findings)
        suppressed = list(suppressed)
        with self._lock:
            self._findings.extend(findings)
            self._suppressed.extend(suppressed)
            self._files_merged += 1
            if file_sample is not None and self.file_benchmark is not None:
                self.file_benchmark.record(*file_sample)
            if rule_times and self.rule_benchmark is not None:
                for rule_id, duration in rule_times.items():
                    self.rule_benchmark.record(rule_id, duration)

    def append_threshold(self, finding: Finding) -> None:
        with self._lock:
            self._findings.append(finding)

    def snapshot(self) -> list[Finding]:
        """Consistent copy of every finding merged so far."""
        with self._lock:
            return list(self._findings)

    def suppressed(self) -> list[Finding]:
        """Copy of the findings the baseline filtered out."""
        with self._lock:
            return list(self._suppressed)

    @property
    def files_merged(self) -> int:
        with self._lock:
            return self._files_merged

    def __len__(self) -> int:
        with self._lock:
            return len(self._findings)
