"""Rule engine — runs a rule set over one file at a time."""

from __future__ import annotations

import ast
import hashlib
import logging
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING

from lintrun.scanner.models import Finding
from lintrun.scanner.rules.base import Rule

if TYPE_CHECKING:
    from lintrun.lint.cache import LinterCache

logger = logging.getLogger(__name__)


class SourceFile:
    """A lintable file with lazily read, droppable contents."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._contents: str | None = None

    @property
    def contents(self) -> str:
        if self._contents is None:
            try:
                self._contents = self.path.read_text(encoding="utf-8", errors="ignore")
            except OSError as e:
                logger.debug("Skipping %s: %s", self.path, e)
                self._contents = ""
        return self._contents

    @property
    def lines(self) -> list[str]:
        return self.contents.splitlines()

    def invalidate_cache(self) -> None:
        """Drop the cached contents once the file has been linted."""
        self._contents = None

    def __repr__(self) -> str:
        return f"SourceFile({str(self.path)!r})"


class RuleStorage:
    """Run-wide store shared by all workers.

    Holds parsed syntax trees keyed by content digest so that several
    rules (and identical files) share one parse.
    """

    def __init__(self) -> None:
        self._trees: dict[str, ast.AST | None] = {}
        self._lock = threading.Lock()

    def parsed(self, file: SourceFile) -> ast.AST | None:
        key = hashlib.sha1(file.contents.encode("utf-8")).hexdigest()
        with self._lock:
            if key in self._trees:
                return self._trees[key]
        try:
            tree: ast.AST | None = ast.parse(file.contents, filename=str(file.path))
        except (SyntaxError, ValueError):
            logger.debug("AST parse failed for %s", file.path)
            tree = None
        with self._lock:
            return self._trees.setdefault(key, tree)

    def __len__(self) -> int:
        with self._lock:
            return len(self._trees)


class Linter:
    """Per-file handle given to the visit callback."""

    def __init__(
        self,
        file: SourceFile,
        rules: list[Rule],
        cache: LinterCache | None = None,
    ) -> None:
        self.file = file
        self.rules = rules
        self._cache = cache

    def findings(self, storage: RuleStorage) -> list[Finding]:
        findings, _ = self._collect(storage, timed=False)
        return findings

    def findings_and_rule_times(
        self, storage: RuleStorage
    ) -> tuple[list[Finding], dict[str, float]]:
        """Like findings(), plus elapsed seconds per rule identifier.

        Cached files report no rule times since no rule ran.
        """
        return self._collect(storage, timed=True)

    def _collect(
        self, storage: RuleStorage, timed: bool
    ) -> tuple[list[Finding], dict[str, float]]:
        if self._cache is not None:
            cached = self._cache.get(self.file.path)
            if cached is not None:
                return cached, {}

        findings: list[Finding] = []
        rule_times: dict[str, float] = {}
        for rule in self.rules:
            start = time.perf_counter()
            findings.extend(rule.validate(self.file, storage))
            if timed:
                rule_times[rule.identifier] = time.perf_counter() - start

        if self._cache is not None:
            self._cache.put(self.file.path, findings)
        return findings, rule_times
