"""Rich output formatting helpers for the fimbl CLI.

Report events are printed one per line, colored by kind, followed by a
one-line summary. Listings are plain path lines, or a table with
``--long``.

Kind Color Mapping:
    CONTENT_CHANGED = bold red, NOT_TRACKED / ALREADY_TRACKED = yellow,
    IS_DIRECTORY / FILENAME_UNSUPPORTED = cyan
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from fimbl.core.batch import BatchResult
from fimbl.core.fingerprint import Fingerprint
from fimbl.core.records.codec import fingerprint_to_dict
from fimbl.core.report import ReportKind

_KIND_STYLES: dict[ReportKind, str] = {
    ReportKind.CONTENT_CHANGED: "bold red",
    ReportKind.NOT_TRACKED: "yellow",
    ReportKind.ALREADY_TRACKED: "yellow",
    ReportKind.IS_DIRECTORY: "cyan",
    ReportKind.FILENAME_UNSUPPORTED: "cyan",
}

console = Console(highlight=False)


def kind_style(kind: ReportKind) -> str:
    """Return the Rich style string for a given report kind."""
    return _KIND_STYLES.get(kind, "white")


def _format_ns(ns: int | None) -> str:
    if ns is None:
        return "-"
    moment = datetime.fromtimestamp(ns / 1_000_000_000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def print_batch_result(result: BatchResult, quiet_when_clean: bool = False) -> None:
    """Print report events, skipped files and a summary line.

    Args:
        result: Outcome of a batch operation.
        quiet_when_clean: Print nothing at all for a clean result.
    """
    if result.is_clean and quiet_when_clean:
        return

    for event in result.reports:
        line = Text("- ")
        line.append(event.message, style=kind_style(event.kind))
        line.append(f": {event.path}")
        console.print(line, soft_wrap=True)

    for path, reason in result.failures:
        line = Text("- ")
        line.append("file skipped", style="bold magenta")
        line.append(f": {path} ({reason})")
        console.print(line, soft_wrap=True)

    _print_summary(result)


def _print_summary(result: BatchResult) -> None:
    if result.is_clean:
        console.print("[green]No problems found.[/green]")
        return
    parts = [f"[bold]{len(result.reports)}[/bold] reported"]
    if result.failures:
        parts.append(f"[magenta]{len(result.failures)} skipped[/magenta]")
    console.print(" | ".join(parts))


def print_tracked(
    tracked: list[tuple[Path, Fingerprint]],
    database_dir: Path | None = None,
    long: bool = False,
) -> None:
    """Print the tracked files.

    Args:
        tracked: ``(path, fingerprint)`` pairs from the store.
        database_dir: If given, printed as a header first.
        long: Show a table with hash and modification time.
    """
    if database_dir is not None:
        console.print(f"Fimbl DB is at {database_dir}", soft_wrap=True)
        console.print("Files tracked:\n")

    if not long:
        for path, _ in tracked:
            console.print(Text(str(path)), soft_wrap=True)
        return

    if not tracked:
        console.print("[dim]No files tracked.[/dim]")
        return

    table = Table(title="Tracked Files", show_header=True, header_style="bold")
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("SHA3-256", style="dim")
    table.add_column("Modified (UTC)")
    table.add_column("Flags", justify="center")
    for path, fingerprint in tracked:
        flags = []
        if fingerprint.is_symlink:
            flags.append("link")
        if fingerprint.read_only:
            flags.append("ro")
        table.add_row(
            str(path),
            fingerprint.content_hex[:16],
            _format_ns(fingerprint.modified),
            ",".join(flags) or "-",
        )
    console.print(table)


def batch_result_to_json(result: BatchResult) -> dict[str, Any]:
    """Convert a batch result to a JSON-serializable dict."""
    return {
        "clean": result.is_clean,
        "reports": [event.to_dict() for event in result.reports],
        "failures": [
            {"path": str(path), "reason": reason} for path, reason in result.failures
        ],
    }


def tracked_to_json(tracked: list[tuple[Path, Fingerprint]]) -> list[dict[str, Any]]:
    """Convert a listing to a JSON-serializable list."""
    return [
        {"path": str(path), "fingerprint": fingerprint_to_dict(fingerprint)}
        for path, fingerprint in tracked
    ]


def print_json(data: Any) -> None:
    """Print data as indented JSON to stdout, unstyled so it can be piped."""
    click.echo(json.dumps(data, indent=2, default=str))
