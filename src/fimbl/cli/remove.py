"""``fimbl remove <files>`` - Stop tracking files, keeping the removal on record.

Files do not need to exist any more to be removed.

Exit Codes:
    0 - All files removed.
    1 - Some files were not tracked (without --tolerant) or were directories.
    2 - Fatal error.
"""

from __future__ import annotations

from pathlib import Path

import click

from fimbl.cli.common import FILES_ARGUMENT, run_batch
from fimbl.config import FimblSettings


@click.command("remove")
@FILES_ARGUMENT
@click.pass_obj
def remove_command(settings: FimblSettings, files: tuple[Path, ...]) -> None:
    """Remove FILES from the database (keeping historic fingerprints)."""
    run_batch(
        settings,
        lambda tracker: tracker.remove(files, tolerant=settings.tolerant),
        quiet_when_clean=True,
    )
