"""fimbl CLI - Command line file integrity checker.

Entry point for the ``fimbl`` command-line tool. Registers all subcommands
under a single Click group. All commands use a database at
``~/.config/fimbl/db`` unless ``--database`` or ``FIMBL_DATABASE`` says
otherwise.

Commands:
    add        - Add new files to the database (and fingerprint).
    remove     - Remove files from the database (keeping historic fingerprints).
    list       - List all files currently in the database.
    verify     - Verify the files specified against the database.
    verify-all - Verify all files currently in the database.
    accept     - Accept modifications to the specified files.

Usage::

    fimbl add /etc/hosts /etc/resolv.conf
    fimbl verify /etc/hosts
    fimbl --tolerant accept /etc/hosts
    fimbl --keep-going verify-all
    fimbl -d ./db list --long
"""

from __future__ import annotations

from pathlib import Path

import click

from fimbl import __version__
from fimbl.cli.accept import accept_command
from fimbl.cli.add import add_command
from fimbl.cli.common import configure_logging, fail
from fimbl.cli.list_cmd import list_command
from fimbl.cli.remove import remove_command
from fimbl.cli.verify import verify_all_command, verify_command
from fimbl.config import DATABASE_ENV_VAR, load_settings
from fimbl.exceptions import FimblError


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output and debug logging.")
@click.option(
    "--tolerant", "-t",
    is_flag=True,
    help="Tolerate unexpected pre-existing or absent files.",
)
@click.option(
    "--keep-going", "-k",
    is_flag=True,
    help="Skip files that cannot be read instead of aborting.",
)
@click.option(
    "--database", "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Database directory (default: ${DATABASE_ENV_VAR} or ~/.config/fimbl/db).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    tolerant: bool,
    keep_going: bool,
    database: Path | None,
) -> None:
    """fimbl: Command line file integrity checker.

    Record fingerprints (content hash and metadata) of files and later
    detect changed content, changed attributes and untracked files.
    """
    configure_logging(verbose)
    try:
        ctx.obj = load_settings(
            database=database,
            tolerant=tolerant,
            keep_going=keep_going,
            verbose=verbose,
        )
    except FimblError as exc:
        fail(exc)


# Register all subcommands
cli.add_command(add_command)
cli.add_command(remove_command)
cli.add_command(list_command)
cli.add_command(verify_command)
cli.add_command(verify_all_command)
cli.add_command(accept_command)
