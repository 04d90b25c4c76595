# topmark:header:start
#
#   project      : EmbedFmt
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running EmbedFmt in a controlled working directory.

`run_cli_in()` changes the process working directory to the given directory
before invoking the Click CLI, so relative file arguments and globs resolve
against the test project. Formatter commands are small Python scripts run with
the current interpreter, so no real formatter needs to be installed.
"""

from __future__ import annotations

import os
import shlex
import sys
import textwrap
from typing import TYPE_CHECKING

from click.testing import CliRunner, Result

from embedfmt.cli.main import cli
from tests.conftest import fixture

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

MESSY: str = "<div>\n  <script>\nlet x=1;\n  </script>\n</div>\n"
TIDY: str = "<div>\n  <script>\n    let x = 1;\n  </script>\n</div>\n"


def run_cli_in(cwd: Path, argv: Sequence[str]) -> Result:
    """Invoke the CLI with ``cwd`` as the working directory.

    Args:
        cwd (Path): Directory used as the working directory for the invocation.
        argv (Sequence[str]): CLI argument vector, e.g. ``["format", "--check", "."]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    previous: str = os.getcwd()
    try:
        os.chdir(cwd)
        return runner.invoke(cli, list(argv))
    finally:
        os.chdir(previous)


def python_command(script: Path) -> str:
    """Return a formatter command line running ``script`` with this interpreter."""
    return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"


@fixture()
def project(tmp_path: Path) -> Path:
    """An empty project directory (``.git`` marker stops config discovery)."""
    root: Path = tmp_path / "proj"
    (root / ".git").mkdir(parents=True)
    return root


@fixture()
def tidy_command(tmp_path: Path) -> str:
    """Formatter command that trims the input and spaces out ``=``."""
    script: Path = tmp_path / "tidy_fmt.py"
    script.write_text(
        textwrap.dedent(
            """
            import re
            import sys

            text = sys.stdin.read()
            sys.stdout.write(re.sub(r"\\s*=\\s*", " = ", text.strip()))
            """
        ),
        encoding="utf-8",
    )
    return python_command(script)


@fixture()
def failing_command(tmp_path: Path) -> str:
    """Formatter command that always exits with status 1."""
    script: Path = tmp_path / "failing_fmt.py"
    script.write_text(
        "import sys\nsys.stderr.write('unexpected token')\nsys.exit(1)\n", encoding="utf-8"
    )
    return python_command(script)
