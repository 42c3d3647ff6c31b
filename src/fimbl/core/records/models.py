"""Fingerprint records: the facts stored for each tracked path.

The database holds one current record per path, either:

- ``Assert``: as of ``at``, the path had this fingerprint.
- ``Retract``: as of ``at``, the path is no longer tracked.

Removal writes a ``Retract`` instead of deleting the entry so that the fact
of removal survives. Record timestamps are informational only; they are
never used to resolve conflicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from fimbl.core.fingerprint import Fingerprint


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Assert:
    """The fingerprint was valid at the given time."""

    fingerprint: Fingerprint
    at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class Retract:
    """No fingerprint was valid (or tracked) from the given time."""

    at: datetime = field(default_factory=utc_now)


FingerprintRecord = Assert | Retract


def asserted_fingerprint(record: FingerprintRecord | None) -> Fingerprint | None:
    """Return the fingerprint a record asserts, or None for retractions and absence."""
    if isinstance(record, Assert):
        return record.fingerprint
    return None
