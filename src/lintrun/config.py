"""Configuration — XDG paths and env vars, plus the per-project YAML lint config."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from lintrun.errors import ConfigError
from lintrun.lint.options import BaselineSaveMode

DEFAULT_CONFIG_FILE = ".lintrun.yml"
DEFAULT_BASELINE_FILE = ".lintrun-baseline.json"


def _default_cache_dir() -> Path:
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg) / "lintrun"
    return Path.home() / ".cache" / "lintrun"


@dataclass
class LintRunConfig:
    """Application-wide configuration."""

    cache_dir: Path = field(default_factory=_default_cache_dir)
    jobs: int = field(default_factory=lambda: os.cpu_count() or 1)

    @classmethod
    def load(cls) -> LintRunConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_cache = os.environ.get("LINTRUN_CACHE_DIR")
        if env_cache:
            config.cache_dir = Path(env_cache)

        env_jobs = os.environ.get("LINTRUN_JOBS")
        if env_jobs:
            try:
                config.jobs = max(1, int(env_jobs))
            except ValueError as e:
                raise ConfigError(f"LINTRUN_JOBS must be an integer, got {env_jobs!r}") from e

        return config


@dataclass(frozen=True)
class LintConfiguration:
    """Project lint settings read from .lintrun.yml."""

    included: tuple[str, ...] = ()
    excluded: tuple[str, ...] = ()
    disabled_rules: tuple[str, ...] = ()
    warning_threshold: int | None = None
    reporter: str = "console"
    baseline_mode: BaselineSaveMode = BaselineSaveMode.REPORTED
    source: Path | None = None


def load_configuration(path: str | Path | None = None) -> LintConfiguration:
    """Load the YAML lint configuration.

    With no explicit path, ``.lintrun.yml`` in the working directory is
    used if present; otherwise defaults apply. An explicit path that does
    not exist is an error.
    """
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILE
        if not candidate.is_file():
            return LintConfiguration()
        path = candidate
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e
    return load_configuration_from_string(text, source=path)


def load_configuration_from_string(
    text: str, source: Path | None = None
) -> LintConfiguration:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration YAML must be a mapping")

    threshold = data.get("warning_threshold")
    if threshold is not None:
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
            raise ConfigError("warning_threshold must be a positive integer")

    try:
        baseline_mode = BaselineSaveMode(data.get("baseline_mode", "reported"))
    except ValueError as e:
        raise ConfigError(f"Unknown baseline_mode {data.get('baseline_mode')!r}") from e

    return LintConfiguration(
        included=_str_tuple(data, "included"),
        excluded=_str_tuple(data, "excluded"),
        disabled_rules=_str_tuple(data, "disabled_rules"),
        warning_threshold=threshold,
        reporter=str(data.get("reporter", "console")),
        baseline_mode=baseline_mode,
        source=source,
    )


def _str_tuple(data: dict, key: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list of strings")
    return tuple(str(v) for v in value)
