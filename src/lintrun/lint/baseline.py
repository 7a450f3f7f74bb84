"""Suppress findings recorded by an earlier run."""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Iterable
from pathlib import Path

from lintrun.errors import ConfigError
from lintrun.scanner.models import Finding

logger = logging.getLogger(__name__)

_FORMAT_VERSION = 1


def fingerprint(finding: Finding, root: Path | None = None) -> str:
    """Stable identity of a finding across runs.

    Built from rule identifier, file path, and message; line and column
    are left out so that edits elsewhere in a file do not resurface
    known findings. The file path is resolved and, when it lies under
    ``root``, made relative to it, so the same file matches however the
    target was spelled on the command line.
    """
    raw = "\x1f".join(
        (finding.rule.identifier, _normalized_file(finding.location.file, root), finding.message)
    )
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def _normalized_file(file: str, root: Path | None) -> str:
    if not file:
        return file
    path = Path(file).resolve()
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return path.as_posix()


class Baseline:
    """Fingerprint set loaded once at run start and replaced once at run end."""

    def __init__(self, path: str | Path, root: str | Path | None = None) -> None:
        self.path = Path(path)
        # Directory that fingerprinted paths are relative to
        self.root = Path(root).resolve() if root is not None else self.path.parent.resolve()
        self._fingerprints: frozenset[str] = frozenset()

    def load(self) -> Baseline:
        """Read fingerprints from disk. A missing file is an empty baseline."""
        if not self.path.exists():
            logger.info("No baseline at %s, starting empty", self.path)
            self._fingerprints = frozenset()
            return self
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Cannot read baseline {self.path}: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("fingerprints"), list):
            raise ConfigError(f"Baseline {self.path} is not a lintrun baseline")
        self._fingerprints = frozenset(str(fp) for fp in data["fingerprints"])
        logger.debug("Loaded %d baseline fingerprints", len(self._fingerprints))
        return self

    def __len__(self) -> int:
        return len(self._fingerprints)

    def is_known(self, finding: Finding) -> bool:
        return fingerprint(finding, self.root) in self._fingerprints

    def filter(self, findings: Iterable[Finding]) -> list[Finding]:
        """Drop every finding already in the baseline."""
        return self.partition(findings)[0]

    def partition(self, findings: Iterable[Finding]) -> tuple[list[Finding], list[Finding]]:
        """Split findings into (new, suppressed)."""
        kept: list[Finding] = []
        suppressed: list[Finding] = []
        for finding in findings:
            (suppressed if self.is_known(finding) else kept).append(finding)
        return kept, suppressed

    def save(self, findings: Iterable[Finding]) -> None:
        """Replace the stored baseline with the given findings."""
        findings = list(findings)
        payload = {
            "version": _FORMAT_VERSION,
            "fingerprints": sorted({fingerprint(f, self.root) for f in findings}),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("Saved baseline with %d findings to %s", len(findings), self.path)
