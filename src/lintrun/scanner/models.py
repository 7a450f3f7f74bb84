"""Finding data models."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace


class Severity(enum.Enum):
    """Finding severity level."""

    WARNING = "warning"
    ERROR = "error"


class RuleKind(enum.Enum):
    """Which command runs a rule: `lint` (text rules) or `analyze` (AST rules)."""

    LINT = "lint"
    ANALYZER = "analyzer"


@dataclass(frozen=True)
class RuleDescription:
    """Static metadata identifying a rule."""

    identifier: str
    name: str
    description: str = ""
    kind: RuleKind = RuleKind.LINT


@dataclass(frozen=True)
class Location:
    """Where a finding was reported. Empty file means run-wide."""

    file: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if not self.file:
            return "<run>"
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Finding:
    """A single reported issue for one location in one file."""

    rule: RuleDescription
    severity: Severity
    location: Location
    message: str

    @property
    def rule_id(self) -> str:
        return self.rule.identifier

    def with_severity(self, severity: Severity) -> Finding:
        """Return a copy carrying a different severity."""
        if severity == self.severity:
            return self
        return replace(self, severity=severity)

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule.identifier,
            "rule_name": self.rule.name,
            "kind": self.rule.kind.value,
            "severity": self.severity.value,
            "file": self.location.file,
            "line": self.location.line,
            "column": self.location.column,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Finding:
        return cls(
            rule=RuleDescription(
                identifier=data["rule_id"],
                name=data.get("rule_name", data["rule_id"]),
                kind=RuleKind(data.get("kind", "lint")),
            ),
            severity=Severity(data["severity"]),
            location=Location(
                file=data.get("file", ""),
                line=int(data.get("line", 0)),
                column=int(data.get("column", 0)),
            ),
            message=data.get("message", ""),
        )
