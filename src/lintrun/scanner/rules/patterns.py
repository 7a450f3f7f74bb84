"""Line-oriented regex rules for hardcoded endpoints, keys, and secrets."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from lintrun.scanner.models import Finding, RuleDescription, RuleKind, Severity
from lintrun.scanner.rules.base import Rule

if TYPE_CHECKING:
    from lintrun.scanner.engine import RuleStorage, SourceFile


class PatternRule(Rule):
    """Reports every non-excluded match of a compiled regex, line by line."""

    def __init__(
        self,
        identifier: str,
        name: str,
        regex: re.Pattern[str],
        severity: Severity,
        message: str,
        description: str = "",
    ) -> None:
        self.description = RuleDescription(
            identifier=identifier,
            name=name,
            description=description,
            kind=RuleKind.LINT,
        )
        self.regex = regex
        self.severity = severity
        self.message = message

    def validate(self, file: SourceFile, storage: RuleStorage) -> list[Finding]:
        findings: list[Finding] = []
        for line_num, line in enumerate(file.lines, start=1):
            for match in self.regex.finditer(line):
                matched_text = match.group(0)
                if is_excluded(matched_text):
                    continue
                findings.append(
                    self._finding(
                        file,
                        line_num,
                        match.start() + 1,
                        self.message.format(match=_truncate(matched_text)),
                    )
                )
        return findings


def _truncate(text: str, limit: int = 60) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


PATTERN_RULES: list[PatternRule] = [
    PatternRule(
        identifier="hardcoded_url",
        name="Hardcoded URL",
        regex=re.compile(r"https?://[a-zA-Z0-9\-._~:/?#\[\]@!$&\'()*+,;=%]+"),
        severity=Severity.WARNING,
        message="Hardcoded URL '{match}' should come from configuration",
        description="URLs embedded in source pin the code to one deployment.",
    ),
    PatternRule(
        identifier="ip_literal",
        name="IP Literal",
        regex=re.compile(
            r"\b(\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})"
            r"(?::(\d{1,5}))?\b"
        ),
        severity=Severity.WARNING,
        message="IP address literal '{match}' should come from configuration",
    ),
    PatternRule(
        identifier="aws_access_key",
        name="AWS Access Key",
        regex=re.compile(r"\b(AKIA[0-9A-Z]{16})\b"),
        severity=Severity.ERROR,
        message="AWS access key '{match}' committed to source",
    ),
    PatternRule(
        identifier="azure_connection_string",
        name="Azure Connection String",
        regex=re.compile(
            r"DefaultEndpointsProtocol=https?;"
            r"AccountName=[^;]+;"
            r"AccountKey=[^;]+",
            re.IGNORECASE,
        ),
        severity=Severity.ERROR,
        message="Azure storage connection string committed to source",
    ),
    PatternRule(
        identifier="openai_api_key",
        name="OpenAI API Key",
        regex=re.compile(r"\b(sk-[a-zA-Z0-9]{20,})\b"),
        severity=Severity.ERROR,
        message="OpenAI API key '{match}' committed to source",
    ),
    PatternRule(
        identifier="generic_api_key",
        name="Generic API Key",
        regex=re.compile(
            r"(?:api[_-]?key|apikey|secret[_-]?key|auth[_-]?token)"
            r'\s*[=:]\s*["\']?([a-zA-Z0-9_\-]{16,})["\']?',
            re.IGNORECASE,
        ),
        severity=Severity.WARNING,
        message="Possible API key assignment '{match}'",
    ),
]

# Common false-positive patterns to exclude
EXCLUDE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"https?://(?:localhost|127\.0\.0\.1|0\.0\.0\.0)"),
    re.compile(r"https?://example\.com"),
    re.compile(r"https?://schemas\."),
    re.compile(r"https?://www\.w3\.org"),
    re.compile(r"https?://tools\.ietf\.org"),
    re.compile(r"\b(?:127\.0\.0\.1|0\.0\.0\.0|255\.255\.255\.\d+)\b"),
    re.compile(r"\b10\.0\.0\.0\b"),  # common in CIDR notation
]


def is_excluded(text: str) -> bool:
    """Check if matched text is a known false positive."""
    return any(p.search(text) for p in EXCLUDE_PATTERNS)
