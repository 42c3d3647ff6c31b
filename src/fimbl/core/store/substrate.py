"""Durable byte-keyed storage backed by a single SQLite file.

The substrate knows nothing about records; it maps ``bytes`` keys to
``bytes`` values and offers a transaction scope for read-modify-write
sequences. ``BEGIN IMMEDIATE`` takes the write lock up front, so two
processes updating the same database are serialized rather than racing
between the read and the write.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fimbl.exceptions import StoreAccessError

logger = logging.getLogger(__name__)

DB_FILENAME = "fingerprints.sqlite3"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS fingerprints (
    key BLOB PRIMARY KEY,
    value BLOB NOT NULL
);
"""


class KeyValueStore:
    """Persistent ``bytes -> bytes`` mapping in ``<directory>/fingerprints.sqlite3``.

    Usage::

        with KeyValueStore.open(Path("~/.config/fimbl/db").expanduser()) as kv:
            with kv.transaction():
                if not kv.contains(b"key"):
                    kv.insert(b"key", b"value")
    """

    def __init__(self, directory: Path, connection: sqlite3.Connection) -> None:
        self._directory = directory
        self._conn = connection
        self._in_transaction = False

    @classmethod
    def open(cls, directory: Path) -> KeyValueStore:
        """Open the store in ``directory``, creating it if required.

        Raises:
            StoreAccessError: If the directory or database cannot be
                created or opened.
        """
        try:
            directory.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(directory / DB_FILENAME, isolation_level=None)
            conn.execute("PRAGMA synchronous=FULL")
            conn.executescript(_SCHEMA)
        except (OSError, sqlite3.Error) as exc:
            raise StoreAccessError(
                f"cannot open database at {directory}: {exc}"
            ) from exc
        logger.debug("Opened fingerprint database at %s", directory)
        return cls(directory, conn)

    @property
    def directory(self) -> Path:
        """Location of the database directory."""
        return self._directory

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> KeyValueStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed reads and writes as one atomic unit.

        Commits on normal exit, rolls back and re-raises on any exception.
        Nested use joins the outer transaction.
        """
        if self._in_transaction:
            yield
            return
        self._execute("BEGIN IMMEDIATE")
        self._in_transaction = True
        try:
            yield
        except BaseException:
            self._in_transaction = False
            try:
                self._execute("ROLLBACK")
            except StoreAccessError:
                # The original error is the one worth reporting.
                logger.warning("Rollback failed", exc_info=True)
            raise
        self._in_transaction = False
        self._execute("COMMIT")

    def get(self, key: bytes) -> bytes | None:
        """Return the value stored for ``key``, or None."""
        row = self._execute(
            "SELECT value FROM fingerprints WHERE key = ?", (key,)
        ).fetchone()
        return None if row is None else bytes(row[0])

    def contains(self, key: bytes) -> bool:
        row = self._execute(
            "SELECT 1 FROM fingerprints WHERE key = ?", (key,)
        ).fetchone()
        return row is not None

    def insert(self, key: bytes, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        self._execute(
            "INSERT OR REPLACE INTO fingerprints (key, value) VALUES (?, ?)",
            (key, value),
        )

    def scan(self) -> Iterator[tuple[bytes, bytes]]:
        """Yield every ``(key, value)`` pair in key order."""
        rows = self._execute(
            "SELECT key, value FROM fingerprints ORDER BY key"
        ).fetchall()
        for key, value in rows:
            yield bytes(key), bytes(value)

    def __len__(self) -> int:
        return self._execute("SELECT COUNT(*) FROM fingerprints").fetchone()[0]

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as exc:
            raise StoreAccessError(f"database access error: {exc}") from exc
