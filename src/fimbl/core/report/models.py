"""Report events: unexpected modifications and other notable conditions.

Report events are successful outcomes, not errors. Only the event kind and
the path it concerns are part of the contract; rendering is left to the
caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ReportKind(Enum):
    """Closed set of discrepancies fimbl reports."""

    ALREADY_TRACKED = "already_tracked"
    NOT_TRACKED = "not_tracked"
    CONTENT_CHANGED = "content_changed"
    FILENAME_UNSUPPORTED = "filename_unsupported"
    IS_DIRECTORY = "is_directory"


_MESSAGES: dict[ReportKind, str] = {
    ReportKind.ALREADY_TRACKED: "file already exists",
    ReportKind.NOT_TRACKED: "file is untracked",
    ReportKind.CONTENT_CHANGED: "file content changed",
    ReportKind.FILENAME_UNSUPPORTED: "file ignored - unsupported file name",
    ReportKind.IS_DIRECTORY: "file is (now) a directory",
}


@dataclass(frozen=True)
class ReportEvent:
    """A single report about one path.

    Attributes:
        kind: What was found.
        path: The path the event concerns.
    """

    kind: ReportKind
    path: Path

    @property
    def message(self) -> str:
        """Human-readable description without the path."""
        return _MESSAGES[self.kind]

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "path": str(self.path)}

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"
