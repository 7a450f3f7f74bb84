"""Linter cache — per-file findings memo, reused while a file is unchanged."""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from lintrun.scanner.models import Finding

logger = logging.getLogger(__name__)


def rules_fingerprint(identifiers: Iterable[str], extra: str = "") -> str:
    """Digest of the active rule set; a different set means a different cache file."""
    raw = ",".join(sorted(identifiers)) + "|" + extra
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()[:16]


class LinterCache:
    """Thread-safe cache read at construction and written once via save()."""

    def __init__(self, directory: str | Path, fingerprint: str) -> None:
        self.path = Path(directory) / f"cache_{fingerprint}.json"
        self._entries: dict[str, dict] = {}
        self._lock = threading.Lock()
        self._dirty = False
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.debug("Ignoring unreadable cache %s: %s", self.path, e)
            return
        if isinstance(data, dict):
            self._entries = data
            logger.debug("Loaded %d cache entries from %s", len(data), self.path)

    def get(self, path: str | Path) -> list[Finding] | None:
        key = str(path)
        mtime = _mtime(path)
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or mtime is None or entry.get("mtime") != mtime:
            return None
        try:
            return [Finding.from_dict(d) for d in entry["findings"]]
        except (KeyError, TypeError, ValueError):
            logger.debug("Dropping malformed cache entry for %s", key)
            return None

    def put(self, path: str | Path, findings: list[Finding]) -> None:
        mtime = _mtime(path)
        if mtime is None:
            return
        entry = {"mtime": mtime, "findings": [f.to_dict() for f in findings]}
        with self._lock:
            self._entries[str(path)] = entry
            self._dirty = True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def save(self) -> None:
        """Write entries to disk. Raises OSError on failure."""
        with self._lock:
            if not self._dirty:
                return
            text = json.dumps(self._entries)
            self._dirty = False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")


def _mtime(path: str | Path) -> float | None:
    try:
        return Path(path).stat().st_mtime
    except OSError:
        return None
