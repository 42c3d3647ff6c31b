"""Turning user-supplied paths into candidate files for tracking.

Public API::

    from fimbl.discovery import prepare_paths

    prepared = prepare_paths([Path("notes.txt"), Path("link-to-notes")])
    for path in prepared.files:
        ...
"""

from __future__ import annotations

from fimbl.discovery.models import PreparedPaths
from fimbl.discovery.paths import canonicalize, expand_symlink_chain, prepare_paths

__all__ = [
    "PreparedPaths",
    "canonicalize",
    "expand_symlink_chain",
    "prepare_paths",
]
