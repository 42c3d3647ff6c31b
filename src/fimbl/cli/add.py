"""``fimbl add <files>`` - Fingerprint new files and add them to the database.

Symlinks are added together with every link in their chain and the final
target. Directories are reported and skipped.

Exit Codes:
    0 - All files added (or, with --tolerant, already tracked unchanged).
    1 - Some files were already tracked, changed, or skipped.
    2 - Fatal error.
"""

from __future__ import annotations

from pathlib import Path

import click

from fimbl.cli.common import FILES_ARGUMENT, run_batch
from fimbl.config import FimblSettings


@click.command("add")
@FILES_ARGUMENT
@click.pass_obj
def add_command(settings: FimblSettings, files: tuple[Path, ...]) -> None:
    """Add new FILES to the database with their current fingerprints.

    A file that is already tracked is reported. With --tolerant it is
    verified instead, and only reported if its content changed.
    """
    run_batch(
        settings,
        lambda tracker: tracker.add(files, tolerant=settings.tolerant),
        quiet_when_clean=True,
    )
