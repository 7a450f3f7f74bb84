"""Cumulative elapsed time per file or per rule."""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from pathlib import Path

logger = logging.getLogger(__name__)


class Benchmark:
    """Named accumulation of durations keyed by file path or rule identifier.

    Not synchronized on its own: the Aggregator serializes every record
    call behind its lock.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._totals: defaultdict[str, float] = defaultdict(float)

    def record(self, key: str, duration: float) -> None:
        self._totals[key] += duration

    def entries(self) -> list[tuple[str, float]]:
        """(key, total seconds) pairs, slowest first."""
        return sorted(self._totals.items(), key=lambda kv: kv[1], reverse=True)

    def __len__(self) -> int:
        return len(self._totals)

    def __contains__(self, key: object) -> bool:
        return key in self._totals

    def total(self, key: str) -> float:
        return self._totals.get(key, 0.0)

    def save(self, directory: str | Path) -> Path:
        """Write the sorted report to directory and return its path."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        stamp = time.strftime("%Y%m%d-%H%M%S")
        path = directory / f"benchmark_{self.name}_{stamp}.txt"
        lines = [f"{duration:.6f}: {key}" for key, duration in self.entries()]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        logger.info("Wrote %s benchmark (%d entries) to %s", self.name, len(lines), path)
        return path
