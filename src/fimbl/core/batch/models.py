"""Batch result model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fimbl.core.report import ReportEvent


@dataclass
class BatchResult:
    """Outcome of running one operation over many paths.

    Attributes:
        reports: Report events in the order they were produced.
        failures: ``(path, reason)`` for files skipped because they could
            not be fingerprinted. Only populated in keep-going mode.
    """

    reports: list[ReportEvent] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """True if nothing was reported and nothing was skipped."""
        return not self.reports and not self.failures

    def extend(self, reports: list[ReportEvent]) -> None:
        self.reports.extend(reports)
