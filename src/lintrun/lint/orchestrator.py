"""Lint orchestrator — drives one lint or analyze run from file discovery to exit code."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Protocol

from rich.console import Console

from lintrun.config import DEFAULT_BASELINE_FILE, LintConfiguration, LintRunConfig
from lintrun.lint import severity
from lintrun.lint.aggregator import Aggregator
from lintrun.lint.baseline import Baseline
from lintrun.lint.cache import LinterCache, rules_fingerprint
from lintrun.lint.options import BaselineSaveMode, RunOptions
from lintrun.lint.threshold import (
    exit_signal,
    serious_count,
    threshold_broken,
    threshold_finding,
)
from lintrun.lint.walker import FileSetWalker, VisitCallback
from lintrun.report.base import Reporter
from lintrun.scanner.engine import Linter, RuleStorage, SourceFile
from lintrun.scanner.models import Finding
from lintrun.scanner.rules import rules_for

logger = logging.getLogger(__name__)


class Walker(Protocol):
    def visit(
        self,
        options: RunOptions,
        cache: LinterCache | None,
        storage: RuleStorage,
        callback: VisitCallback,
    ) -> list[SourceFile]:
        ...


@dataclass(frozen=True)
class RunResult:
    """Outcome of a completed run. The caller turns exit_code into a process exit."""

    findings: tuple[Finding, ...]
    serious: int
    files: int
    exit_code: int

    @property
    def total(self) -> int:
        return len(self.findings)


class LintOrchestrator:
    """Runs rules over every lintable file and applies the run-wide policies.

    Per-file work happens on the walker's worker threads; everything
    after the visit (baseline save, threshold, final report, benchmarks,
    cache) runs on the calling thread.
    """

    def __init__(
        self,
        configuration: LintConfiguration,
        reporter: Reporter,
        walker: Walker | None = None,
        app_config: LintRunConfig | None = None,
        console: Console | None = None,
    ) -> None:
        self._configuration = configuration
        self._reporter = reporter
        self._walker = walker
        self._app_config = app_config or LintRunConfig()
        self._console = console or Console(stderr=True)

    def run(self, options: RunOptions) -> RunResult:
        """Lint every file and return the result.

        Raises FatalMisconfiguration before touching any file when both
        lenient and strict are set. ConfigError from the walker
        propagates unchanged.
        """
        severity.check_modes(options.lenient, options.strict)

        rules = rules_for(options.mode.rule_kind, self._configuration.disabled_rules)
        walker = self._walker or FileSetWalker(
            self._configuration,
            rules,
            jobs=options.jobs or self._app_config.jobs,
        )
        aggregator = Aggregator(benchmark=options.benchmark)
        storage = RuleStorage()
        cache = self._open_cache(options, [rule.identifier for rule in rules])
        baseline = self._open_baseline(options)
        if baseline is not None:
            options = replace(options, baseline_path=baseline.path)
        reporter = self._reporter

        def lint_file(linter: Linter) -> None:
            file_sample = None
            rule_times = None
            if options.benchmark:
                start = time.perf_counter()
                raw, rule_times = linter.findings_and_rule_times(storage)
                file_sample = (str(linter.file.path), time.perf_counter() - start)
            else:
                raw = linter.findings(storage)

            current = severity.adjust(raw, options.lenient, options.strict)
            suppressed: list[Finding] = []
            if baseline is not None:
                current, suppressed = baseline.partition(current)

            aggregator.merge(
                current,
                suppressed=suppressed,
                file_sample=file_sample,
                rule_times=rule_times,
            )
            linter.file.invalidate_cache()
            reporter.report(current, realtime=True)

        files = walker.visit(options, cache, storage, lint_file)

        if baseline is not None:
            self._save_baseline(baseline, aggregator, options.baseline_mode)

        threshold = self._configuration.warning_threshold
        if threshold_broken(aggregator.snapshot(), threshold, options.lenient):
            breach = threshold_finding(threshold)
            aggregator.append_threshold(breach)
            reporter.report([breach], realtime=True)

        findings = aggregator.snapshot()
        reporter.report(findings, realtime=False)

        serious = serious_count(findings)
        if not options.quiet:
            self._print_status(findings, len(files), serious, options.verb)

        if aggregator.file_benchmark is not None and aggregator.rule_benchmark is not None:
            aggregator.file_benchmark.save(options.benchmark_dir)
            aggregator.rule_benchmark.save(options.benchmark_dir)

        if cache is not None:
            try:
                cache.save()
            except OSError as e:
                logger.debug("Could not save cache %s: %s", cache.path, e)

        return RunResult(
            findings=tuple(findings),
            serious=serious,
            files=len(files),
            exit_code=exit_signal(findings),
        )

    def _open_cache(self, options: RunOptions, rule_ids: list[str]) -> LinterCache | None:
        if not options.cache_enabled:
            return None
        directory = options.cache_path or self._app_config.cache_dir
        extra = ",".join(self._configuration.excluded)
        return LinterCache(directory, rules_fingerprint(rule_ids, extra))

    def _open_baseline(self, options: RunOptions) -> Baseline | None:
        if not options.baseline_enabled:
            return None
        return Baseline(baseline_path_for(options)).load()

    def _save_baseline(
        self,
        baseline: Baseline,
        aggregator: Aggregator,
        mode: BaselineSaveMode,
    ) -> None:
        findings = aggregator.snapshot()
        if mode is BaselineSaveMode.ALL:
            findings.extend(aggregator.suppressed())
        baseline.save(findings)

    def _print_status(
        self, findings: list[Finding], files: int, serious: int, verb: str
    ) -> None:
        self._console.print(
            f"Done {verb}! Found {len(findings)} violation{_plural(len(findings))}, "
            f"{serious} serious in {files} file{_plural(files)}."
        )


def baseline_path_for(options: RunOptions) -> Path:
    """Explicit baseline path, else the default file beside the first target."""
    if options.baseline_path is not None:
        return options.baseline_path
    root = Path(options.paths[0]) if options.paths else Path.cwd()
    if root.is_file():
        root = root.parent
    return root / DEFAULT_BASELINE_FILE


def _plural(count: int) -> str:
    return "" if count == 1 else "s"
