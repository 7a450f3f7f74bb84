"""File-set walker — discovers lintable files and fans them out to a thread pool."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from lintrun.config import LintConfiguration
from lintrun.errors import ConfigError
from lintrun.lint.cache import LinterCache
from lintrun.lint.options import RunOptions
from lintrun.scanner.engine import Linter, RuleStorage, SourceFile
from lintrun.scanner.rules.base import Rule

logger = logging.getLogger(__name__)

# Directories to always skip
_SKIP_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".venv",
    "venv",
    ".env",
    "env",
    "dist",
    "build",
    ".tox",
    ".eggs",
}

# Binary / non-text extensions to skip
_SKIP_EXTENSIONS = {
    ".pyc",
    ".pyo",
    ".so",
    ".dylib",
    ".dll",
    ".exe",
    ".bin",
    ".dat",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".ico",
    ".pdf",
    ".zip",
    ".tar",
    ".gz",
    ".bz2",
    ".whl",
    ".egg",
    ".db",
    ".sqlite",
    ".sqlite3",
}

# Max file size to lint (1 MB)
_MAX_FILE_SIZE = 1_048_576

VisitCallback = Callable[[Linter], None]


class FileSetWalker:
    """Collects the files under the target paths and lints them in parallel."""

    def __init__(
        self,
        configuration: LintConfiguration,
        rules: list[Rule],
        jobs: int = 1,
    ) -> None:
        self._configuration = configuration
        self._rules = rules
        self._jobs = max(1, jobs)

    def lintable_files(
        self, options: RunOptions, ignored: Iterable[Path] = ()
    ) -> list[SourceFile]:
        """Resolve target paths into a sorted, de-duplicated file list.

        Files in ``ignored`` (the run's own baseline and cache files) are
        never linted, even when they sit inside a target directory.
        """
        targets = options.paths or self._configuration.included or (".",)
        skip = {Path(p).resolve() for p in ignored}
        seen: dict[Path, SourceFile] = {}
        for target in targets:
            path = Path(target)
            if not path.exists():
                raise ConfigError(f"Path does not exist: {target}")
            if path.is_file():
                candidates: Iterator[Path] = iter([path])
            else:
                candidates = self._walk(path)
            for candidate in candidates:
                if self._is_excluded(candidate):
                    continue
                resolved = candidate.resolve()
                if resolved in skip:
                    logger.debug("Skipping run artifact %s", candidate)
                    continue
                if resolved not in seen:
                    seen[resolved] = SourceFile(candidate)
        return [seen[p] for p in sorted(seen)]

    def visit(
        self,
        options: RunOptions,
        cache: LinterCache | None,
        storage: RuleStorage,
        callback: VisitCallback,
    ) -> list[SourceFile]:
        """Invoke callback once per lintable file on the worker pool.

        Raises ConfigError for unusable targets. Exceptions raised by the
        callback propagate once every file has been dispatched.
        """
        ignored: list[Path] = []
        if options.baseline_enabled and options.baseline_path is not None:
            ignored.append(options.baseline_path)
        if cache is not None:
            ignored.append(cache.path)
        files = self.lintable_files(options, ignored)
        logger.info(
            "%s %d file(s) with %d rule(s) on %d worker(s)",
            options.verb.capitalize(),
            len(files),
            len(self._rules),
            self._jobs,
        )
        if not files:
            return files

        with ThreadPoolExecutor(max_workers=self._jobs, thread_name_prefix="lintrun") as pool:
            futures = [
                pool.submit(callback, Linter(file, self._rules, cache)) for file in files
            ]
            for future in futures:
                future.result()
        return files

    def _walk(self, directory: Path) -> Iterator[Path]:
        """Walk directory yielding lintable files."""
        for root, dirs, files in os.walk(directory):
            # Prune skipped directories in-place
            dirs[:] = sorted(
                d
                for d in dirs
                if d not in _SKIP_DIRS
                and not d.endswith(".egg-info")
                and not self._is_excluded(Path(root) / d)
            )

            for name in files:
                path = Path(root) / name
                if path.suffix.lower() in _SKIP_EXTENSIONS:
                    continue
                try:
                    if path.stat().st_size > _MAX_FILE_SIZE:
                        continue
                except OSError:
                    continue
                yield path

    def _is_excluded(self, path: Path) -> bool:
        text = path.as_posix()
        for pattern in self._configuration.excluded:
            pattern = pattern.rstrip("/")
            if fnmatch.fnmatch(path.name, pattern) or fnmatch.fnmatch(text, pattern):
                return True
            # Directory patterns such as "vendor" or "src/generated"
            if f"/{pattern}/" in f"/{text}/":
                return True
        return False
