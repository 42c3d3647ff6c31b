"""Running tracking operations over a list of user-supplied paths.

``FimblTracker`` is the outermost batch runner: it prepares the path list
(symlink chains, directory rejection, canonicalization), fingerprints each
file and hands it to the ``TrackingStore``.

Failure policy:
    By default a file that cannot be fingerprinted, or a link that cannot
    be read, aborts the batch with a ``FileAccessError``; writes already
    made for earlier files are kept. With ``keep_going=True`` the failure is
    logged and recorded in ``BatchResult.failures``, and the remaining
    files are still processed.
    Database errors always abort.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from fimbl.core.batch.models import BatchResult
from fimbl.core.fingerprint import Fingerprint, compute_fingerprint
from fimbl.core.report import ReportEvent, ReportKind
from fimbl.core.store import TrackingStore
from fimbl.discovery import prepare_paths
from fimbl.exceptions import FileAccessError

logger = logging.getLogger(__name__)

FingerprintOp = Callable[[Path, Fingerprint], list[ReportEvent]]


class FimblTracker:
    """Batch operations over a ``TrackingStore``.

    Example::

        with TrackingStore.open(db_dir) as store:
            tracker = FimblTracker(store, keep_going=True)
            result = tracker.verify([Path("a.txt"), Path("b.txt")])
            for event in result.reports:
                print(event)
    """

    def __init__(
        self,
        store: TrackingStore,
        keep_going: bool = False,
        fingerprinter: Callable[[Path], Fingerprint] = compute_fingerprint,
    ) -> None:
        self._store = store
        self._keep_going = keep_going
        self._fingerprint = fingerprinter

    @property
    def store(self) -> TrackingStore:
        return self._store

    def add(self, paths: Iterable[Path], tolerant: bool = False) -> BatchResult:
        """Fingerprint new files and add them to the database."""
        return self._run_fingerprinted(
            paths,
            lambda path, fp: self._store.add_new(path, fp, tolerant),
        )

    def accept(self, paths: Iterable[Path], tolerant: bool = False) -> BatchResult:
        """Accept the current content of tracked files as correct."""
        return self._run_fingerprinted(
            paths,
            lambda path, fp: self._store.update_existing(path, fp, tolerant),
        )

    def verify(self, paths: Iterable[Path]) -> BatchResult:
        """Verify the given files against the database."""
        return self._run_fingerprinted(paths, self._store.verify)

    def remove(self, paths: Iterable[Path], tolerant: bool = False) -> BatchResult:
        """Stop tracking files. The files themselves need not exist any more."""
        result, files = self._prepare(paths)
        for path in files:
            result.extend(self._store.remove(path, tolerant))
        return result

    def verify_all(self) -> BatchResult:
        """Verify every file currently tracked in the database."""
        result = BatchResult()
        for path, _ in self._store.list_tracked():
            self._process_one(result, path, self._store.verify)
        return result

    def tracked(self) -> list[tuple[Path, Fingerprint]]:
        """List the tracked files with their fingerprints."""
        return self._store.list_tracked()

    # -- Internals ----------------------------------------------------------

    def _prepare(self, paths: Iterable[Path]) -> tuple[BatchResult, list[Path]]:
        prepared = prepare_paths(paths, keep_going=self._keep_going)
        result = BatchResult(
            reports=[
                ReportEvent(ReportKind.IS_DIRECTORY, d) for d in prepared.directories
            ],
            failures=list(prepared.failures),
        )
        return result, prepared.files

    def _run_fingerprinted(
        self, paths: Iterable[Path], operation: FingerprintOp
    ) -> BatchResult:
        result, files = self._prepare(paths)
        for path in files:
            self._process_one(result, path, operation)
        return result

    def _process_one(
        self, result: BatchResult, path: Path, operation: FingerprintOp
    ) -> None:
        try:
            fingerprint = self._fingerprint(path)
        except FileAccessError as exc:
            if not self._keep_going:
                raise
            logger.warning("Skipping %s: %s", path, exc.reason)
            result.failures.append((path, exc.reason))
            return
        result.extend(operation(path, fingerprint))
