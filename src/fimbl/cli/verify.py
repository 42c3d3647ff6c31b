"""``fimbl verify <files>`` and ``fimbl verify-all`` - Detect drift.

Each file is fingerprinted again and compared field by field with the
stored fingerprint: content, symlink flag, creation and modification times,
mode bits and the read-only flag.

Exit Codes:
    0 - Every file matched its stored fingerprint.
    1 - Some file changed, is untracked, or was skipped.
    2 - Fatal error (including an unreadable file without --keep-going).
"""

from __future__ import annotations

from pathlib import Path

import click

from fimbl.cli.common import FILES_ARGUMENT, FORMAT_OPTION, run_batch
from fimbl.config import FimblSettings


@click.command("verify")
@FILES_ARGUMENT
@FORMAT_OPTION
@click.pass_obj
def verify_command(
    settings: FimblSettings, files: tuple[Path, ...], output_format: str
) -> None:
    """Verify FILES against the fingerprints in the database."""
    run_batch(settings, lambda tracker: tracker.verify(files), output_format)


@click.command("verify-all")
@FORMAT_OPTION
@click.pass_obj
def verify_all_command(settings: FimblSettings, output_format: str) -> None:
    """Verify every file currently tracked in the database."""
    run_batch(settings, lambda tracker: tracker.verify_all(), output_format)
