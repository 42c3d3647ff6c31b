"""Data models for the discovery module."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class PreparedPaths:
    """Candidate paths split into trackable files and rejected directories.

    Attributes:
        files: Canonical paths of files and symlinks to operate on, in
            first-seen order without duplicates.
        directories: Paths whose final target is a directory. These are
            reported, never fingerprinted.
        failures: ``(path, reason)`` for links whose chain could not be
            expanded. Only populated in keep-going mode.
    """

    files: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)
