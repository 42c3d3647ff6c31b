"""``fimbl list`` - List all files currently tracked in the database."""

from __future__ import annotations

import click

from fimbl.cli.common import FORMAT_OPTION, fail
from fimbl.cli.output import print_json, print_tracked, tracked_to_json
from fimbl.config import FimblSettings
from fimbl.core.store import TrackingStore
from fimbl.exceptions import FimblError


@click.command("list")
@FORMAT_OPTION
@click.option(
    "--long", "-l", "long_format",
    is_flag=True,
    help="Show hash, modification time and flags in a table.",
)
@click.pass_obj
def list_command(
    settings: FimblSettings, output_format: str, long_format: bool
) -> None:
    """List all files currently tracked in the database.

    Removed files are not listed.
    """
    try:
        with TrackingStore.open(settings.database_dir) as store:
            tracked = store.list_tracked()
    except FimblError as exc:
        fail(exc)
        return

    if output_format == "json":
        print_json(tracked_to_json(tracked))
        return

    print_tracked(
        tracked,
        database_dir=settings.database_dir if settings.verbose else None,
        long=long_format,
    )
