"""Pure decision logic for tracking operations.

Each ``decide_*`` function looks at the current record for a path (or None
if the path was never seen) and the newly computed fingerprint, and returns
a ``Decision``: the record to write, if any, and the report to raise, if
any. Nothing here touches the filesystem or the database.

Rules:

- **add**: absent or retracted paths get a fresh ``Assert``. An existing
  ``Assert`` is reported as already tracked, unless tolerant, in which case
  the fingerprints are compared and a mismatch is reported as changed
  content. An existing fingerprint is never overwritten by add.
- **update** (accept): any existing record, or any path when tolerant, gets
  a fresh ``Assert`` without comparing the old fingerprint.
- **remove**: any existing record, or any path when tolerant, gets a
  ``Retract``.
- **verify**: absent and retracted paths are not tracked; an ``Assert``
  whose fingerprint differs in any field is changed content.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from fimbl.core.fingerprint import Fingerprint
from fimbl.core.records.models import (
    Assert,
    FingerprintRecord,
    Retract,
    asserted_fingerprint,
    utc_now,
)
from fimbl.core.report import ReportKind


@dataclass(frozen=True)
class Decision:
    """Outcome of a decision: at most one write and at most one report.

    Attributes:
        write: Record to store for the path, or None to leave it untouched.
        report: Report to raise for the path, or None.
    """

    write: FingerprintRecord | None = None
    report: ReportKind | None = None

    @property
    def is_noop(self) -> bool:
        return self.write is None and self.report is None


NOOP = Decision()


def decide_add(
    current: FingerprintRecord | None,
    fingerprint: Fingerprint,
    tolerate_existing: bool,
    now: datetime | None = None,
) -> Decision:
    """Decide how to record a file that is expected to be new."""
    stored = asserted_fingerprint(current)
    if stored is None:
        # Never seen, or retracted: re-tracking is always allowed.
        return Decision(write=Assert(fingerprint, now or utc_now()))
    if not tolerate_existing:
        return Decision(report=ReportKind.ALREADY_TRACKED)
    if stored != fingerprint:
        return Decision(report=ReportKind.CONTENT_CHANGED)
    return NOOP


def decide_update(
    current: FingerprintRecord | None,
    fingerprint: Fingerprint,
    tolerate_untracked: bool,
    now: datetime | None = None,
) -> Decision:
    """Decide how to accept a new fingerprint for a tracked file."""
    if current is None and not tolerate_untracked:
        return Decision(report=ReportKind.NOT_TRACKED)
    return Decision(write=Assert(fingerprint, now or utc_now()))


def decide_remove(
    current: FingerprintRecord | None,
    tolerate_untracked: bool,
    now: datetime | None = None,
) -> Decision:
    """Decide how to stop tracking a file."""
    if current is None and not tolerate_untracked:
        return Decision(report=ReportKind.NOT_TRACKED)
    return Decision(write=Retract(now or utc_now()))


def decide_verify(
    current: FingerprintRecord | None,
    fingerprint: Fingerprint,
) -> Decision:
    """Decide whether a file still matches its recorded fingerprint."""
    stored = asserted_fingerprint(current)
    if stored is None:
        return Decision(report=ReportKind.NOT_TRACKED)
    if stored != fingerprint:
        return Decision(report=ReportKind.CONTENT_CHANGED)
    return NOOP
