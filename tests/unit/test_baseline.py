"""Tests for baseline fingerprinting, filtering, and persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from conftest import make_finding

from lintrun.errors import ConfigError
from lintrun.lint.baseline import Baseline, fingerprint
from lintrun.scanner.models import Severity


def test_fingerprint_ignores_line_and_severity():
    a = make_finding("r", Severity.WARNING, file="x.py", line=3, message="m")
    b = make_finding("r", Severity.ERROR, file="x.py", line=40, message="m")
    assert fingerprint(a) == fingerprint(b)


def test_fingerprint_depends_on_rule_file_and_message():
    base = make_finding("r", file="x.py", message="m")
    assert fingerprint(base) != fingerprint(make_finding("other", file="x.py", message="m"))
    assert fingerprint(base) != fingerprint(make_finding("r", file="y.py", message="m"))
    assert fingerprint(base) != fingerprint(make_finding("r", file="x.py", message="n"))


def test_missing_file_loads_empty(tmp_path: Path):
    baseline = Baseline(tmp_path / "none.json").load()
    assert len(baseline) == 0
    findings = [make_finding(line=1), make_finding(line=2)]
    assert baseline.filter(findings) == findings


def test_save_then_filter(tmp_path: Path):
    known = make_finding("known", file="a.py")
    new = make_finding("new", file="a.py")
    path = tmp_path / "baseline.json"

    Baseline(path).save([known])
    baseline = Baseline(path).load()

    assert baseline.is_known(known)
    assert not baseline.is_known(new)
    assert baseline.filter([known, new]) == [new]


def test_known_finding_moved_lines_still_suppressed(tmp_path: Path):
    path = tmp_path / "baseline.json"
    Baseline(path).save([make_finding("r", line=1)])
    baseline = Baseline(path).load()
    assert baseline.filter([make_finding("r", line=99)]) == []


def test_partition(tmp_path: Path):
    known = make_finding("known")
    new = make_finding("new")
    path = tmp_path / "baseline.json"
    Baseline(path).save([known])

    kept, suppressed = Baseline(path).load().partition([known, new])
    assert kept == [new]
    assert suppressed == [known]


def test_save_replaces_previous(tmp_path: Path):
    path = tmp_path / "nested" / "baseline.json"
    Baseline(path).save([make_finding("old")])
    Baseline(path).save([make_finding("new")])

    baseline = Baseline(path).load()
    assert not baseline.is_known(make_finding("old"))
    assert baseline.is_known(make_finding("new"))
    data = json.loads(path.read_text())
    assert len(data["fingerprints"]) == 1


def test_corrupt_baseline_is_config_error(tmp_path: Path):
    path = tmp_path / "baseline.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        Baseline(path).load()


def test_save_has_no_finding_payload(tmp_path: Path):
    path = tmp_path / "baseline.json"
    Baseline(path).save([make_finding("r", file="a.py", message="https://api.example.org")])
    data = json.loads(path.read_text())
    assert set(data) == {"version", "fingerprints"}
    assert "api.example.org" not in path.read_text()


def test_relative_and_absolute_paths_match(tmp_path: Path, monkeypatch):
    (tmp_path / "src").mkdir()
    absolute = make_finding("r", file=str(tmp_path / "src" / "a.py"), message="m")
    relative = make_finding("r", file="src/a.py", message="m")
    dotted = make_finding("r", file="./src/../src/a.py", message="m")
    path = tmp_path / "baseline.json"

    Baseline(path).save([absolute])
    monkeypatch.chdir(tmp_path)
    baseline = Baseline(path).load()

    assert baseline.is_known(relative)
    assert baseline.is_known(dotted)


def test_paths_outside_root_fall_back_to_absolute(tmp_path: Path):
    root = tmp_path / "project"
    outside = make_finding("r", file=str(tmp_path / "other" / "a.py"))
    assert fingerprint(outside, root.resolve()) == fingerprint(outside)


def test_run_wide_finding_has_no_path():
    finding = make_finding("warning_threshold", file="", message="m")
    assert fingerprint(finding, Path("/somewhere")) == fingerprint(finding)
