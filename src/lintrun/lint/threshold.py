"""Warning-threshold check and the process exit signal."""

from __future__ import annotations

from collections.abc import Iterable

from lintrun.scanner.models import (
    Finding,
    Location,
    RuleDescription,
    RuleKind,
    Severity,
)

EXIT_OK = 0
EXIT_SERIOUS = 2

THRESHOLD_RULE = RuleDescription(
    identifier="warning_threshold",
    name="Warning Threshold",
    description="Number of warnings thrown is above the threshold.",
    kind=RuleKind.LINT,
)


def warning_count(findings: Iterable[Finding]) -> int:
    return sum(1 for f in findings if f.severity == Severity.WARNING)


def serious_count(findings: Iterable[Finding]) -> int:
    return sum(1 for f in findings if f.severity == Severity.ERROR)


def threshold_broken(
    findings: Iterable[Finding],
    threshold: int | None,
    lenient: bool = False,
) -> bool:
    """True when a threshold is set, the run is not lenient, and warnings reach it."""
    if threshold is None or lenient:
        return False
    return warning_count(findings) >= threshold


def threshold_finding(threshold: int) -> Finding:
    return Finding(
        rule=THRESHOLD_RULE,
        severity=Severity.ERROR,
        location=Location(),
        message=f"Number of warnings exceeded threshold of {threshold}.",
    )


def exit_signal(findings: Iterable[Finding]) -> int:
    return EXIT_SERIOUS if serious_count(findings) else EXIT_OK
