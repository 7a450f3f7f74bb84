"""Severity policy — run-wide lenient/strict remapping of findings."""

from __future__ import annotations

from collections.abc import Iterable

from lintrun.errors import FatalMisconfiguration
from lintrun.scanner.models import Finding, Severity

MUTUALLY_EXCLUSIVE_MESSAGE = (
    "Invalid command line options: 'lenient' and 'strict' are mutually exclusive."
)


def check_modes(lenient: bool, strict: bool) -> None:
    """Raise FatalMisconfiguration when both modes are requested."""
    if lenient and strict:
        raise FatalMisconfiguration(MUTUALLY_EXCLUSIVE_MESSAGE)


def adjust(findings: Iterable[Finding], lenient: bool, strict: bool) -> list[Finding]:
    """Apply leniency (errors become warnings) or strictness (warnings become errors).

    With neither flag the findings are returned unchanged; with both,
    FatalMisconfiguration is raised.
    """
    check_modes(lenient, strict)
    if lenient:
        return [_remap(f, Severity.ERROR, Severity.WARNING) for f in findings]
    if strict:
        return [_remap(f, Severity.WARNING, Severity.ERROR) for f in findings]
    return list(findings)


def _remap(finding: Finding, source: Severity, target: Severity) -> Finding:
    if finding.severity == source:
        return finding.with_severity(target)
    return finding
