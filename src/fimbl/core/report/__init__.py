"""Report events returned by tracking operations."""

from fimbl.core.report.models import ReportEvent, ReportKind

__all__ = ["ReportEvent", "ReportKind"]
