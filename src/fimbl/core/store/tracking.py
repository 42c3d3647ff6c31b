"""The tracking store: one current fingerprint record per path.

Every operation handles a single path as one read-modify-write inside a
database transaction: read the current record, apply the matching
``decide_*`` rule, write the resulting record (if any) and return the
resulting report events (possibly none).

Keys are the UTF-8 bytes of the canonical absolute path. Paths that cannot
be encoded as UTF-8 are reported as unsupported and never touch the
database. Entries are never deleted; removal writes a ``Retract``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from fimbl.core.fingerprint import Fingerprint
from fimbl.core.records import (
    Assert,
    Decision,
    FingerprintRecord,
    decide_add,
    decide_remove,
    decide_update,
    decide_verify,
    decode_record,
    encode_record,
)
from fimbl.core.report import ReportEvent, ReportKind
from fimbl.core.store.substrate import KeyValueStore
from fimbl.exceptions import RecordDecodeError

logger = logging.getLogger(__name__)


def path_as_key(path: Path) -> bytes | None:
    """Convert a path to its database key, or None if it is not valid UTF-8."""
    try:
        return str(path).encode("utf-8")
    except UnicodeEncodeError:
        return None


def path_from_key(key: bytes) -> Path:
    """Convert a database key back to a path.

    Raises:
        RecordDecodeError: If the key is not valid UTF-8.
    """
    try:
        return Path(key.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise RecordDecodeError(f"stored key is not valid UTF-8: {key!r}") from exc


class TrackingStore:
    """Fingerprint database keyed by canonical file path.

    Example::

        store = TrackingStore.open(Path("/tmp/fimbl-db"))
        reports = store.add_new(path, compute_fingerprint(path), False)
        reports += store.verify(path, compute_fingerprint(path))
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    @classmethod
    def open(cls, directory: Path) -> TrackingStore:
        """Open (or create) the fingerprint database in ``directory``."""
        return cls(KeyValueStore.open(directory))

    @property
    def directory(self) -> Path:
        """Location of the database directory."""
        return self._kv.directory

    def close(self) -> None:
        self._kv.close()

    def __enter__(self) -> TrackingStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- Operations ---------------------------------------------------------

    def add_new(
        self, path: Path, fingerprint: Fingerprint, tolerate_existing: bool
    ) -> list[ReportEvent]:
        """Store the fingerprint of a file that should not yet be tracked.

        A path already tracked is reported, unless ``tolerate_existing`` is
        set, in which case the file is verified instead. Add never replaces
        an existing fingerprint; use ``update_existing`` for that.
        """
        return self._apply(
            path, lambda current: decide_add(current, fingerprint, tolerate_existing)
        )

    def update_existing(
        self, path: Path, fingerprint: Fingerprint, tolerate_untracked: bool
    ) -> list[ReportEvent]:
        """Accept a new fingerprint for a tracked file.

        Untracked paths are reported, unless ``tolerate_untracked`` is set,
        in which case the file is added.
        """
        return self._apply(
            path,
            lambda current: decide_update(current, fingerprint, tolerate_untracked),
        )

    def remove(self, path: Path, tolerate_untracked: bool) -> list[ReportEvent]:
        """Stop tracking a file, keeping the fact that it was removed."""
        return self._apply(
            path, lambda current: decide_remove(current, tolerate_untracked)
        )

    def verify(self, path: Path, fingerprint: Fingerprint) -> list[ReportEvent]:
        """Check that ``fingerprint`` matches the one recorded for ``path``."""
        return self._apply(path, lambda current: decide_verify(current, fingerprint))

    def list_tracked(self) -> list[tuple[Path, Fingerprint]]:
        """Return every currently tracked path with its fingerprint.

        Retracted entries are excluded. Results are ordered by path.
        """
        tracked: list[tuple[Path, Fingerprint]] = []
        for key, raw in self._kv.scan():
            record = decode_record(raw)
            if isinstance(record, Assert):
                tracked.append((path_from_key(key), record.fingerprint))
        return tracked

    def get_record(self, path: Path) -> FingerprintRecord | None:
        """Return the current record for ``path``, or None if never seen."""
        key = path_as_key(path)
        if key is None:
            return None
        raw = self._kv.get(key)
        return None if raw is None else decode_record(raw)

    # -- Internals ----------------------------------------------------------

    def _apply(
        self,
        path: Path,
        decide: Callable[[FingerprintRecord | None], Decision],
    ) -> list[ReportEvent]:
        key = path_as_key(path)
        if key is None:
            return [ReportEvent(ReportKind.FILENAME_UNSUPPORTED, path)]

        with self._kv.transaction():
            raw = self._kv.get(key)
            current = None if raw is None else decode_record(raw)
            decision = decide(current)
            if decision.write is not None:
                self._kv.insert(key, encode_record(decision.write))
                logger.debug(
                    "Wrote %s record for %s",
                    type(decision.write).__name__.lower(),
                    path,
                )

        if decision.report is None:
            return []
        return [ReportEvent(decision.report, path)]
