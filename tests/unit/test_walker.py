"""Tests for lintable file discovery and parallel dispatch."""

from __future__ import annotations

import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from lintrun.config import LintConfiguration
from lintrun.errors import ConfigError
from lintrun.lint.options import RunOptions
from lintrun.lint.walker import FileSetWalker
from lintrun.scanner.engine import RuleStorage
from lintrun.scanner.rules.patterns import PATTERN_RULES


def _names(files) -> list[str]:
    return sorted(f.path.name for f in files)


def test_skips_vendored_directories(sample_tree: Path):
    walker = FileSetWalker(LintConfiguration(), PATTERN_RULES)
    files = walker.lintable_files(RunOptions(paths=(str(sample_tree),)))
    assert _names(files) == ["app.py", "clean.txt", "keys.py"]


def test_excluded_patterns(sample_tree: Path):
    (sample_tree / "generated").mkdir()
    (sample_tree / "generated" / "out.py").write_text("x = 1\n")
    configuration = LintConfiguration(excluded=("*.txt", "generated"))

    walker = FileSetWalker(configuration, PATTERN_RULES)
    files = walker.lintable_files(RunOptions(paths=(str(sample_tree),)))

    assert _names(files) == ["app.py", "keys.py"]


def test_skips_binary_extensions(tmp_path: Path):
    (tmp_path / "image.png").write_bytes(b"\x89PNG")
    (tmp_path / "code.py").write_text("x = 1\n")
    walker = FileSetWalker(LintConfiguration(), PATTERN_RULES)
    assert _names(walker.lintable_files(RunOptions(paths=(str(tmp_path),)))) == ["code.py"]


def test_single_file_and_duplicates(sample_tree: Path):
    app = str(sample_tree / "app.py")
    walker = FileSetWalker(LintConfiguration(), PATTERN_RULES)
    files = walker.lintable_files(RunOptions(paths=(app, app, str(sample_tree))))
    assert _names(files) == ["app.py", "clean.txt", "keys.py"]


def test_included_used_when_no_paths(sample_tree: Path):
    configuration = LintConfiguration(included=(str(sample_tree / "keys.py"),))
    walker = FileSetWalker(configuration, PATTERN_RULES)
    assert _names(walker.lintable_files(RunOptions())) == ["keys.py"]


def test_missing_path_is_config_error(tmp_path: Path):
    walker = FileSetWalker(LintConfiguration(), PATTERN_RULES)
    with pytest.raises(ConfigError, match="does not exist"):
        walker.visit(
            RunOptions(paths=(str(tmp_path / "missing"),)),
            None,
            RuleStorage(),
            lambda linter: None,
        )


def test_visit_calls_back_once_per_file_on_workers(sample_tree: Path):
    seen: list[str] = []
    threads: set[str] = set()
    lock = threading.Lock()

    def callback(linter) -> None:
        with lock:
            seen.append(linter.file.path.name)
            threads.add(threading.current_thread().name)

    walker = FileSetWalker(LintConfiguration(), PATTERN_RULES, jobs=3)
    files = walker.visit(RunOptions(paths=(str(sample_tree),)), None, RuleStorage(), callback)

    assert sorted(seen) == ["app.py", "clean.txt", "keys.py"]
    assert len(files) == 3
    assert all(name.startswith("lintrun") for name in threads)


def test_callback_errors_propagate(sample_tree: Path):
    def callback(linter) -> None:
        raise RuntimeError("boom")

    walker = FileSetWalker(LintConfiguration(), PATTERN_RULES, jobs=2)
    with pytest.raises(RuntimeError, match="boom"):
        walker.visit(RunOptions(paths=(str(sample_tree),)), None, RuleStorage(), callback)


def test_skips_baseline_and_cache_files(sample_tree: Path):
    baseline = sample_tree / ".lintrun-baseline.json"
    baseline.write_text('{"version": 1, "fingerprints": []}')
    cache = MagicMock()
    cache.path = sample_tree / "cache_0123.json"
    cache.path.write_text("{}")
    seen: list[str] = []
    lock = threading.Lock()

    def callback(linter) -> None:
        with lock:
            seen.append(linter.file.path.name)

    options = RunOptions(
        paths=(str(sample_tree),), use_baseline=True, baseline_path=baseline
    )
    walker = FileSetWalker(LintConfiguration(), PATTERN_RULES)
    walker.visit(options, cache, RuleStorage(), callback)

    assert sorted(seen) == ["app.py", "clean.txt", "keys.py"]


def test_baseline_file_linted_when_baseline_disabled(sample_tree: Path):
    (sample_tree / "baseline.json").write_text("{}")
    options = RunOptions(paths=(str(sample_tree),), baseline_path=sample_tree / "baseline.json")
    walker = FileSetWalker(LintConfiguration(), PATTERN_RULES)
    assert "baseline.json" in _names(walker.lintable_files(options))
