"""JSON reporter: the full finding list as one document."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from typing import TextIO

from lintrun.report.base import StreamingReporter
from lintrun.scanner.models import Finding


class JsonReporter(StreamingReporter):
    realtime = False

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, findings: Sequence[Finding]) -> None:
        stream = self._stream or sys.stdout
        ordered = sorted(
            findings,
            key=lambda f: (f.location.file, f.location.line, f.location.column, f.rule_id),
        )
        json.dump([f.to_dict() for f in ordered], stream, indent=2)
        stream.write("\n")
