"""Built-in rule registry."""

from __future__ import annotations

from collections.abc import Iterable

from lintrun.errors import ConfigError
from lintrun.scanner.models import RuleKind
from lintrun.scanner.rules.base import Rule
from lintrun.scanner.rules.patterns import PATTERN_RULES
from lintrun.scanner.rules.python import PYTHON_RULES

ALL_RULES: list[Rule] = [*PATTERN_RULES, *PYTHON_RULES]


def rules_for(kind: RuleKind, disabled: Iterable[str] = ()) -> list[Rule]:
    """Return the enabled rules of one kind, rejecting unknown identifiers."""
    disabled = set(disabled)
    known = {rule.identifier for rule in ALL_RULES}
    unknown = disabled - known
    if unknown:
        raise ConfigError(f"Unknown rule identifier(s): {', '.join(sorted(unknown))}")
    return [
        rule
        for rule in ALL_RULES
        if rule.description.kind == kind and rule.identifier not in disabled
    ]


__all__ = ["ALL_RULES", "Rule", "rules_for"]
