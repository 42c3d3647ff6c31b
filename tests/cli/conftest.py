"""Shared fixtures for CLI tests.

``fimbl_run`` invokes the CLI against a per-test database directory so no
test touches ``~/.config/fimbl``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner, Result

from fimbl.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def fimbl_run(runner: CliRunner, db_dir: Path) -> Callable[..., Result]:
    """Invoke ``fimbl -d <db_dir> <args...>``."""

    def _run(*args: str) -> Result:
        return runner.invoke(cli, ["-d", str(db_dir), *args])

    return _run


@pytest.fixture
def tracked_file(fimbl_run: Callable[..., Result], sample_file: Path) -> Path:
    """A sample file already added to the database."""
    result = fimbl_run("add", str(sample_file))
    assert result.exit_code == 0, result.output
    return sample_file
