"""Finding reporters."""

from __future__ import annotations

from lintrun.errors import ConfigError
from lintrun.report.base import Reporter, StreamingReporter
from lintrun.report.console import ConsoleReporter, TableReporter
from lintrun.report.json_ import JsonReporter

REPORTERS: dict[str, type[StreamingReporter]] = {
    "console": ConsoleReporter,
    "table": TableReporter,
    "json": JsonReporter,
}


def reporter_from(name: str) -> Reporter:
    """Build a reporter by its configured name."""
    try:
        return REPORTERS[name]()
    except KeyError:
        raise ConfigError(
            f"Unknown reporter {name!r}; choose from {', '.join(sorted(REPORTERS))}"
        ) from None


__all__ = [
    "ConsoleReporter",
    "JsonReporter",
    "REPORTERS",
    "Reporter",
    "TableReporter",
    "reporter_from",
]
