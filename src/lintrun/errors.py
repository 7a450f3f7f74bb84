"""Exception hierarchy shared by the runner and its collaborators."""

from __future__ import annotations


class LintRunError(Exception):
    """Base class for ordinary, reportable failures."""


class ConfigError(LintRunError):
    """Unusable configuration or target paths."""


class FatalMisconfiguration(Exception):
    """Contradictory run options; the run must not start.

    Not a LintRunError, so handlers for ordinary failures never see it.
    """
