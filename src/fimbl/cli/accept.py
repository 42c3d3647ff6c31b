"""``fimbl accept <files>`` - Accept modifications to tracked files.

Replaces the stored fingerprint with the current one without comparing.
With --tolerant, untracked files are added.
"""

from __future__ import annotations

from pathlib import Path

import click

from fimbl.cli.common import FILES_ARGUMENT, run_batch
from fimbl.config import FimblSettings


@click.command("accept")
@FILES_ARGUMENT
@click.pass_obj
def accept_command(settings: FimblSettings, files: tuple[Path, ...]) -> None:
    """Accept the current content and attributes of FILES as correct."""
    run_batch(
        settings,
        lambda tracker: tracker.accept(files, tolerant=settings.tolerant),
        quiet_when_clean=True,
    )
