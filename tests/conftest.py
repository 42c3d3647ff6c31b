"""Shared fixtures for fimbl tests."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Callable, Iterator

import pytest

from fimbl.core.fingerprint import Fingerprint
from fimbl.core.store import TrackingStore


def make_fingerprint(
    content: bytes = b"content",
    is_symlink: bool = False,
    created: int | None = None,
    modified: int | None = 1_700_000_000_000_000_000,
    unix_mode: int | None = 0o100644,
    read_only: bool = False,
) -> Fingerprint:
    """Convenience factory for Fingerprint values without touching the disk."""
    return Fingerprint(
        content_hash=hashlib.sha3_256(content).digest(),
        is_symlink=is_symlink,
        created=created,
        modified=modified,
        unix_mode=unix_mode,
        read_only=read_only,
    )


@pytest.fixture
def fingerprint_factory() -> Callable[..., Fingerprint]:
    """Expose ``make_fingerprint`` to tests as a fixture."""
    return make_fingerprint


@pytest.fixture
def db_dir(tmp_path: Path) -> Path:
    """A database directory that does not exist yet."""
    return tmp_path / "db"


@pytest.fixture
def store(db_dir: Path) -> Iterator[TrackingStore]:
    """An open, empty tracking store."""
    with TrackingStore.open(db_dir) as opened:
        yield opened


@pytest.fixture
def files_dir(tmp_path: Path) -> Path:
    """A directory to hold tracked files, separate from the database."""
    directory = tmp_path / "files"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_file(files_dir: Path) -> Path:
    """A small regular file."""
    path = files_dir / "notes.txt"
    path.write_bytes(b"Lorem ipsum dolor sit amet.\n")
    return path
