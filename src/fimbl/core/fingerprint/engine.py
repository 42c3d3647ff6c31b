"""Fingerprint computation: content hashing and metadata capture.

Content is read through any symlink (the hash covers what the link points
at) while metadata comes from ``lstat`` so that it describes the link node
itself. Timestamps are best-effort; a failure to open, read or stat the
entry is a ``FileAccessError``.
"""

from __future__ import annotations

import hashlib
import logging
import os
import stat
from pathlib import Path

from fimbl.core.fingerprint.models import Fingerprint
from fimbl.exceptions import FileAccessError

logger = logging.getLogger(__name__)

CHUNK_SIZE: int = 64 * 1024

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


def hash_contents(path: Path, chunk_size: int = CHUNK_SIZE) -> bytes:
    """Read the entire file in chunks and return its SHA3-256 digest.

    Args:
        path: File to hash. Symlinks are followed.
        chunk_size: Read buffer size in bytes.

    Returns:
        The 32-byte digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    hasher = hashlib.sha3_256()
    with open(path, "rb") as handle:
        while True:
            chunk = handle.read(chunk_size)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.digest()


def _created_ns(st: os.stat_result) -> int | None:
    birthtime_ns = getattr(st, "st_birthtime_ns", None)
    if birthtime_ns is not None:
        return birthtime_ns
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return int(birthtime * 1_000_000_000)
    return None


def _modified_ns(st: os.stat_result) -> int | None:
    return getattr(st, "st_mtime_ns", None)


def _unix_mode(st: os.stat_result) -> int | None:
    if os.name == "nt":
        return None
    return st.st_mode


def _read_only(st: os.stat_result) -> bool:
    attributes = getattr(st, "st_file_attributes", None)
    if attributes is not None:
        return bool(attributes & stat.FILE_ATTRIBUTE_READONLY)
    return not st.st_mode & _WRITE_BITS


def compute_fingerprint(path: Path) -> Fingerprint:
    """Generate the fingerprint of a file for comparison or storage.

    Args:
        path: The file (or symlink) to fingerprint.

    Returns:
        A new ``Fingerprint``.

    Raises:
        FileAccessError: If the entry cannot be stat'ed, opened or read.
    """
    try:
        st = os.lstat(path)
        content_hash = hash_contents(path)
    except OSError as exc:
        raise FileAccessError(path, exc.strerror or str(exc)) from exc

    fingerprint = Fingerprint(
        content_hash=content_hash,
        is_symlink=stat.S_ISLNK(st.st_mode),
        created=_created_ns(st),
        modified=_modified_ns(st),
        unix_mode=_unix_mode(st),
        read_only=_read_only(st),
    )
    logger.debug("Fingerprinted %s: %s", path, fingerprint.content_hex)
    return fingerprint
