"""Tests for the linter cache."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from conftest import make_finding

from lintrun.lint.cache import LinterCache, rules_fingerprint
from lintrun.scanner.models import Severity


def test_round_trip_through_disk(tmp_path: Path):
    source = tmp_path / "a.py"
    source.write_text("x = 1\n")
    finding = make_finding("secret", Severity.ERROR, file=str(source), line=4)

    cache = LinterCache(tmp_path / "cache", "abc")
    cache.put(source, [finding])
    cache.save()

    reloaded = LinterCache(tmp_path / "cache", "abc")
    cached = reloaded.get(source)
    assert cached is not None
    assert cached[0].rule_id == "secret"
    assert cached[0].severity == Severity.ERROR
    assert cached[0].location == finding.location


def test_modified_file_is_a_miss(tmp_path: Path):
    source = tmp_path / "a.py"
    source.write_text("x = 1\n")
    cache = LinterCache(tmp_path / "cache", "abc")
    cache.put(source, [])

    stat = source.stat()
    os.utime(source, (stat.st_atime, stat.st_mtime + 10))

    assert cache.get(source) is None


def test_unknown_file_is_a_miss(tmp_path: Path):
    cache = LinterCache(tmp_path / "cache", "abc")
    assert cache.get(tmp_path / "nope.py") is None


def test_corrupt_cache_file_ignored(tmp_path: Path):
    directory = tmp_path / "cache"
    directory.mkdir()
    (directory / "cache_abc.json").write_text("garbage")
    assert len(LinterCache(directory, "abc")) == 0


def test_save_failure_raises_oserror(tmp_path: Path):
    source = tmp_path / "a.py"
    source.write_text("x = 1\n")
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")

    cache = LinterCache(blocker, "abc")
    cache.put(source, [])
    with pytest.raises(OSError):
        cache.save()


def test_fingerprint_changes_with_rules():
    assert rules_fingerprint(["a", "b"]) == rules_fingerprint(["b", "a"])
    assert rules_fingerprint(["a"]) != rules_fingerprint(["a", "b"])
    assert rules_fingerprint(["a"], "x") != rules_fingerprint(["a"], "y")
