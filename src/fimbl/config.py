"""Configuration: where the database lives and how commands behave.

The database directory is resolved once, at the command-line edge, and the
resulting path is passed to the store. Resolution order:

1. The ``--database`` option.
2. The ``FIMBL_DATABASE`` environment variable.
3. ``~/.config/fimbl/db``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from fimbl.exceptions import ConfigurationError

DATABASE_ENV_VAR = "FIMBL_DATABASE"
DEFAULT_DATABASE_SUBDIR = Path(".config") / "fimbl" / "db"


@dataclass(frozen=True)
class FimblSettings:
    """Fully resolved settings for one invocation.

    Attributes:
        database_dir: Directory holding the fingerprint database.
        tolerant: Tolerate unexpected pre-existing or absent files.
        keep_going: Skip files that cannot be fingerprinted instead of
            aborting the whole run.
        verbose: Emit debug logging and extra listing detail.
    """

    database_dir: Path
    tolerant: bool = False
    keep_going: bool = False
    verbose: bool = False


def default_database_dir(home: Path | None = None) -> Path:
    """Return ``~/.config/fimbl/db`` for the given (or current) home directory.

    Raises:
        ConfigurationError: If no home directory can be determined.
    """
    if home is None:
        try:
            home = Path.home()
        except RuntimeError as exc:
            raise ConfigurationError(
                "no home directory; use --database to choose a database"
            ) from exc
    return home / DEFAULT_DATABASE_SUBDIR


def resolve_database_dir(
    explicit: Path | None = None,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> Path:
    """Resolve the database directory following the documented order."""
    if explicit is not None:
        return explicit.expanduser()
    env = os.environ if environ is None else environ
    from_env = env.get(DATABASE_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return default_database_dir(home)


def load_settings(
    database: Path | None = None,
    tolerant: bool = False,
    keep_going: bool = False,
    verbose: bool = False,
    environ: Mapping[str, str] | None = None,
) -> FimblSettings:
    """Build ``FimblSettings`` from command-line values and the environment."""
    return FimblSettings(
        database_dir=resolve_database_dir(database, environ),
        tolerant=tolerant,
        keep_going=keep_going,
        verbose=verbose,
    )
