"""Rule protocol shared by the text and AST rule families."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lintrun.scanner.models import Finding, Location, RuleDescription, Severity

if TYPE_CHECKING:
    from lintrun.scanner.engine import RuleStorage, SourceFile


class Rule(ABC):
    """A single rule. Instances are stateless and shared across worker threads."""

    description: RuleDescription
    severity: Severity = Severity.WARNING

    @property
    def identifier(self) -> str:
        return self.description.identifier

    @abstractmethod
    def validate(self, file: SourceFile, storage: RuleStorage) -> list[Finding]:
        """Return the findings this rule produces for one file."""
        ...

    def _finding(self, file: SourceFile, line: int, column: int, message: str) -> Finding:
        return Finding(
            rule=self.description,
            severity=self.severity,
            location=Location(file=str(file.path), line=line, column=column),
            message=message,
        )
