"""Expansion and canonicalization of user-supplied paths.

A symlink is tracked together with every hop of its chain, so that
retargeting a link and modifying the target are both detected. A chain
that ends in a directory is rejected as a whole.

Canonical paths resolve the *parent* directory and keep the final
component, so a link is never collapsed into its target and the two stay
distinct entries in the database.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from fimbl.discovery.models import PreparedPaths
from fimbl.exceptions import FileAccessError

logger = logging.getLogger(__name__)


def canonicalize(path: Path) -> Path:
    """Return the absolute path with its parent directory fully resolved.

    The final component is kept as is, even if it is a symlink. The path
    does not need to exist. ``..`` components are resolved against the
    filesystem, never collapsed textually, so ``dirlink/../f`` names the
    same file the OS would open.
    """
    path = Path(path)
    if path.name in ("", ".", ".."):
        return Path(os.path.realpath(path))
    return Path(os.path.realpath(path.parent)) / path.name


def expand_symlink_chain(path: Path) -> list[Path]:
    """Expand a symlink into the chain of links and the ultimate target.

    The first entry is ``path`` itself. Relative link targets are resolved
    against the directory holding the link. A cycle ends the chain at the
    first repeated entry.

    Raises:
        FileAccessError: If a link cannot be read.
    """
    chain: list[Path] = []
    seen: set[Path] = set()
    target = path
    while True:
        canonical = canonicalize(target)
        if canonical in seen:
            break
        seen.add(canonical)
        chain.append(target)
        try:
            if not target.is_symlink():
                break
            link = os.readlink(target)
        except OSError as exc:
            raise FileAccessError(target, exc.strerror or str(exc)) from exc
        target = target.parent / link
    return chain


def prepare_paths(paths: Iterable[Path], keep_going: bool = False) -> PreparedPaths:
    """Expand symlink chains and separate files from directories.

    Args:
        paths: Paths as supplied by the user.
        keep_going: Record links that cannot be read in
            ``PreparedPaths.failures`` and continue, instead of raising.

    Returns:
        ``PreparedPaths`` with canonical, de-duplicated file paths and the
        directory chains that were rejected.

    Raises:
        FileAccessError: If a link cannot be read and ``keep_going`` is off.
    """
    prepared = PreparedPaths()
    seen_files: set[Path] = set()
    for path in paths:
        try:
            chain = expand_symlink_chain(Path(path))
        except FileAccessError as exc:
            if not keep_going:
                raise
            logger.warning("Skipping %s: %s", exc.path, exc.reason)
            prepared.failures.append((canonicalize(exc.path), exc.reason))
            continue
        if chain[-1].is_dir():
            prepared.directories.extend(canonicalize(p) for p in chain)
            continue
        for entry in chain:
            canonical = canonicalize(entry)
            if canonical not in seen_files:
                seen_files.add(canonical)
                prepared.files.append(canonical)
    return prepared
