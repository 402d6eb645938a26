"""Tool for dumping game table contents to the console."""

from __future__ import annotations

import argparse
import logging
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from icarus_tables.errors import TableError
from icarus_tables.game.tables import GameTables
from icarus_tables.registry import DirectoryFileProvider
from icarus_tables.rows import IGNORE
from icarus_tables.table import DataTable

logger = logging.getLogger(__name__)

MAX_CELL_WIDTH = 60


def setup_logging(console: Console, verbose: bool = False) -> None:
    """Send log records for the package through rich on stderr."""
    package_logger = logging.getLogger("icarus_tables")
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    package_logger.handlers.clear()
    package_logger.addHandler(RichHandler(console=console, show_path=False))
    package_logger.propagate = False


def format_value(value: Any) -> str:
    """Format a field value for display."""
    if value is None:
        return "-"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (list, tuple, set, frozenset)):
        return f"[{', '.join(format_value(v) for v in value)}]"
    if isinstance(value, dict):
        items = ", ".join(f"{format_value(k)}: {format_value(v)}" for k, v in value.items())
        return f"{{{items}}}"
    text = str(value)
    if len(text) > MAX_CELL_WIDTH:
        text = text[: MAX_CELL_WIDTH - 3] + "..."
    return text


def list_tables(console: Console, tables: GameTables) -> None:
    """Print a summary line for each loaded table."""
    summary = Table(title="Tables")
    summary.add_column("Name")
    summary.add_column("Row struct")
    summary.add_column("Rows", justify="right")
    summary.add_column("Deprecated", justify="right")

    for table in tables.tables().values():
        deprecated = sum(1 for row in table if row.is_deprecated)
        summary.add_row(Text(table.name), Text(table.row_struct or "Unknown"), str(table.count), str(deprecated))

    console.print(summary)


def dump_table(console: Console, table: DataTable[Any], limit: int | None = None) -> None:
    """Print the rows of a table, one column per declared field."""
    columns = [f for f in fields(table.row_type) if f.init and not f.metadata.get(IGNORE)]

    output = Table(title=str(table))
    output.add_column("Name", style="bold")
    for column in columns:
        output.add_column(column.name)

    rows = table.values()
    if limit is not None:
        rows = rows[:limit]
    for row in rows:
        name = Text(row.name, style="strike" if row.is_deprecated else "")
        output.add_row(name, *(Text(format_value(getattr(row, column.name))) for column in columns))

    console.print(output)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Dump game data tables to the console")
    parser.add_argument(
        "data_dir",
        type=Path,
        help="Path to the extracted Data directory",
    )
    parser.add_argument(
        "-t", "--table",
        help="Name of the table to dump (omit to list tables)",
    )
    parser.add_argument(
        "-n", "--limit",
        type=int,
        default=None,
        help="Limit number of rows to display",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug details while loading",
    )

    args = parser.parse_args(argv)

    console = Console()
    error_console = Console(stderr=True)
    setup_logging(error_console, args.verbose)

    if not args.data_dir.is_dir():
        error_console.print(f"Error: Data directory not found: {args.data_dir}", markup=False)
        return 1

    logger.debug("Loading game tables from %s", args.data_dir)
    try:
        tables = GameTables.load(DirectoryFileProvider(args.data_dir))
    except (TableError, OSError) as e:
        error_console.print(f"Error loading data: {e}", markup=False)
        return 1

    if args.table is None:
        list_tables(console, tables)
        return 0

    table = tables.get(args.table)
    if table is None:
        error_console.print(f"Error: Unknown table: {args.table}", markup=False)
        list_tables(error_console, tables)
        return 1

    dump_table(console, table, args.limit)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
