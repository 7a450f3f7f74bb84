"""Python analyzer rules using the stdlib ast, parsed once per file via RuleStorage."""

from __future__ import annotations

import ast
from abc import abstractmethod
from typing import TYPE_CHECKING

from lintrun.scanner.models import Finding, RuleDescription, RuleKind, Severity
from lintrun.scanner.rules.base import Rule

if TYPE_CHECKING:
    from lintrun.scanner.engine import RuleStorage, SourceFile

# (module, attribute) pairs that open network connections
_NETWORK_CALLS = {
    ("requests", "get"),
    ("requests", "post"),
    ("requests", "put"),
    ("requests", "delete"),
    ("requests", "patch"),
    ("requests", "head"),
    ("requests", "options"),
    ("httpx", "get"),
    ("httpx", "post"),
    ("httpx", "Client"),
    ("httpx", "AsyncClient"),
    ("aiohttp", "ClientSession"),
    ("openai", "OpenAI"),
    ("openai", "AzureOpenAI"),
    ("boto3", "client"),
    ("boto3", "resource"),
}

_ENDPOINT_KWARGS = (
    "base_url",
    "endpoint",
    "host",
    "url",
    "api_base",
    "azure_endpoint",
)

_BENIGN_HOSTS = (
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "example.com",
    "schemas.",
    "www.w3.org",
    "tools.ietf.org",
)


class PythonRule(Rule):
    """Base for rules that only apply to parseable Python sources."""

    def validate(self, file: SourceFile, storage: RuleStorage) -> list[Finding]:
        if file.path.suffix != ".py":
            return []
        tree = storage.parsed(file)
        if tree is None:
            return []
        return self.check(tree, file)

    @abstractmethod
    def check(self, tree: ast.AST, file: SourceFile) -> list[Finding]:
        """Return findings for an already parsed module."""
        ...


class NetworkCallRule(PythonRule):
    description = RuleDescription(
        identifier="python_network_call",
        name="Python Network Call",
        description="Direct HTTP/cloud client calls should go through a shared client.",
        kind=RuleKind.ANALYZER,
    )
    severity = Severity.WARNING

    def check(self, tree: ast.AST, file: SourceFile) -> list[Finding]:
        findings: list[Finding] = []
        for node in ast.walk(tree):
            if not isinstance(node, ast.Call):
                continue
            func = node.func
            if (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and (func.value.id, func.attr) in _NETWORK_CALLS
            ):
                findings.append(
                    self._finding(
                        file,
                        node.lineno,
                        node.col_offset + 1,
                        f"Direct network call {func.value.id}.{func.attr}()",
                    )
                )
        return findings


class EndpointKwargRule(PythonRule):
    description = RuleDescription(
        identifier="python_endpoint_kwarg",
        name="Python Endpoint Keyword",
        description="Endpoint keyword arguments should not be string literals.",
        kind=RuleKind.ANALYZER,
    )
    severity = Severity.ERROR

    def check(self, tree: ast.AST, file: SourceFile) -> list[Finding]:
        findings: list[Finding] = []
        for node in ast.walk(tree):
            if not (isinstance(node, ast.keyword) and node.arg in _ENDPOINT_KWARGS):
                continue
            value = node.value
            if not (isinstance(value, ast.Constant) and isinstance(value.value, str)):
                continue
            if not value.value or _is_benign_url(value.value):
                continue
            findings.append(
                self._finding(
                    file,
                    value.lineno,
                    value.col_offset + 1,
                    f"Literal endpoint {node.arg}={value.value!r}",
                )
            )
        return findings


def _is_benign_url(url: str) -> bool:
    """Check if a URL is unlikely to be a real endpoint."""
    return any(b in url for b in _BENIGN_HOSTS)


PYTHON_RULES: list[PythonRule] = [NetworkCallRule(), EndpointKwargRule()]
