"""LintRun — concurrent lint/analyze runner for hardcoded endpoints and secrets."""

__version__ = "0.1.0"
