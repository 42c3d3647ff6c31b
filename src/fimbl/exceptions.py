"""fimbl exception hierarchy.

These are failures in the operation of fimbl itself. Unexpected conditions
found while checking files (changed content, untracked files and so on) are
not exceptions: they are returned as report events.

All public exceptions inherit from FimblError so that the command line can
catch them in one place without swallowing unrelated errors.
"""

from __future__ import annotations

from pathlib import Path


class FimblError(Exception):
    """Base exception for all fimbl errors."""


class StoreAccessError(FimblError):
    """Raised when the fingerprint database cannot be opened, read or written."""


class RecordDecodeError(FimblError):
    """Raised when a stored record cannot be decoded.

    A bad record means the database is corrupt or was written by an
    incompatible version. It is never skipped.
    """


class FileAccessError(FimblError):
    """Raised when a file cannot be opened, read or stat'ed for fingerprinting."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot access {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigurationError(FimblError):
    """Raised when no usable database location can be determined."""
