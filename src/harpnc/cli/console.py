# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Console output for the CLI.

Wraps a rich Console so commands print through one object that tests
can replace.
"""

import sys
from typing import Optional

from rich.console import Console as RichConsole
from rich.table import Table
from rich.text import Text


class Console:
    """Thin wrapper around ``rich.console.Console`` with status helpers."""

    def __init__(self, stdout: Optional[RichConsole] = None, stderr: Optional[RichConsole] = None):
        self.out = stdout or RichConsole(file=sys.stdout, highlight=False)
        self.err = stderr or RichConsole(file=sys.stderr, highlight=False)

    def info(self, message: str) -> None:
        self.out.print(message, markup=False)

    def success(self, message: str) -> None:
        self.out.print(Text(message, style="green"))

    def error(self, message: str) -> None:
        self.err.print(Text.assemble(("Error: ", "red"), message), soft_wrap=True)

    def table(self, title: str, columns, rows) -> None:
        """Print rows of plain values under the given column headers."""
        table = Table(title=title)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*("" if value is None else str(value) for value in row))
        self.out.print(table)


console = Console()
