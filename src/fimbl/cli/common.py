"""Shared plumbing for fimbl subcommands.

The group callback in ``main`` stores the resolved ``FimblSettings`` on the
Click context; subcommands receive it with ``@click.pass_obj`` and run their
batch through ``run_batch``, which owns the database lifetime, fatal error
handling and the exit code.

Exit Codes:
    0 - Nothing to report.
    1 - One or more report events, or files skipped with --keep-going.
    2 - Fatal error (database, record decoding, file access, configuration).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.logging import RichHandler

from fimbl.cli.output import batch_result_to_json, print_batch_result, print_json
from fimbl.config import FimblSettings
from fimbl.core.batch import BatchResult, FimblTracker
from fimbl.core.store import TrackingStore
from fimbl.exceptions import FimblError

EXIT_CLEAN = 0
EXIT_REPORTED = 1
EXIT_FATAL = 2

FORMAT_OPTION = click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)

FILES_ARGUMENT = click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path),
)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich, DEBUG if verbose else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def fail(exc: FimblError) -> None:
    """Report a fatal error and exit with code 2."""
    click.echo(f"Error: {exc}")
    sys.exit(EXIT_FATAL)


def run_batch(
    settings: FimblSettings,
    action: Callable[[FimblTracker], BatchResult],
    output_format: str = "text",
    quiet_when_clean: bool = False,
) -> None:
    """Open the database, run ``action``, print the outcome and exit."""
    try:
        with TrackingStore.open(settings.database_dir) as store:
            tracker = FimblTracker(store, keep_going=settings.keep_going)
            result = action(tracker)
    except FimblError as exc:
        fail(exc)
        return

    if output_format == "json":
        print_json(batch_result_to_json(result))
    else:
        print_batch_result(result, quiet_when_clean=quiet_when_clean)

    sys.exit(EXIT_CLEAN if result.is_clean else EXIT_REPORTED)
