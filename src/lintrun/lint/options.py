"""Run options for a single lint or analyze invocation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from lintrun.scanner.models import RuleKind


class Mode(enum.Enum):
    """Which command is running."""

    LINT = "lint"
    ANALYZE = "analyze"

    @property
    def verb(self) -> str:
        return "linting" if self is Mode.LINT else "analyzing"

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.LINT if self is Mode.LINT else RuleKind.ANALYZER


class BaselineSaveMode(enum.Enum):
    """Which findings a baseline save receives.

    REPORTED saves only what this run reported, so findings the old
    baseline suppressed drop out of the new one. ALL also keeps the
    suppressed findings.
    """

    REPORTED = "reported"
    ALL = "all"


@dataclass(frozen=True)
class RunOptions:
    """Everything the orchestrator needs to know about one run.

    Analyze runs never use the cache or the baseline.
    """

    mode: Mode = Mode.LINT
    paths: tuple[str, ...] = ()
    strict: bool = False
    lenient: bool = False
    benchmark: bool = False
    quiet: bool = False
    use_baseline: bool = False
    baseline_path: Path | None = None
    baseline_mode: BaselineSaveMode = BaselineSaveMode.REPORTED
    ignore_cache: bool = False
    cache_path: Path | None = None
    jobs: int | None = None
    benchmark_dir: Path = field(default_factory=Path.cwd)

    @property
    def verb(self) -> str:
        return self.mode.verb

    @property
    def cache_enabled(self) -> bool:
        return self.mode is Mode.LINT and not self.ignore_cache

    @property
    def baseline_enabled(self) -> bool:
        return self.mode is Mode.LINT and self.use_baseline
