"""Fingerprint data model.

A ``Fingerprint`` captures a file's content hash together with the metadata
fimbl tracks: file type (regular file or symlink), creation and modification
times, unix permission bits and the read-only flag. Access time is ignored.

Fingerprints are immutable values with structural equality: two fingerprints
are equal only if every field matches.
"""

from __future__ import annotations

from dataclasses import dataclass

# SHA3-256 digest width in bytes.
HASH_SIZE: int = 32


@dataclass(frozen=True)
class Fingerprint:
    """Fingerprint of file data and attributes at a point in time.

    Attributes:
        content_hash: SHA3-256 digest of the full file content.
        is_symlink: True if the filesystem entry is itself a symbolic link.
        created: Creation time in nanoseconds since the epoch, or None if
            the platform cannot report it.
        modified: Modification time in nanoseconds since the epoch, or None
            if the platform cannot report it.
        unix_mode: Raw ``st_mode`` bits, or None on platforms without a
            unix permission model.
        read_only: True if the entry is not writable.
    """

    content_hash: bytes
    is_symlink: bool = False
    created: int | None = None
    modified: int | None = None
    unix_mode: int | None = None
    read_only: bool = False

    def __post_init__(self) -> None:
        if len(self.content_hash) != HASH_SIZE:
            raise ValueError(
                f"content_hash must be {HASH_SIZE} bytes, "
                f"got {len(self.content_hash)}"
            )

    @property
    def content_hex(self) -> str:
        """Return the content hash as lowercase hex."""
        return self.content_hash.hex()
