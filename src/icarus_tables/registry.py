"""Registry of loaded data tables and cross-table row resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

from icarus_tables.deserializer import DefaultingMode, deserialize_table
from icarus_tables.rows import DataTableRow
from icarus_tables.table import DataTable, RowT
from icarus_tables.values import RowHandle

logger = logging.getLogger(__name__)


class FileProvider(Protocol):
    """Source of table documents, addressed by logical path."""

    def read(self, path: str) -> bytes:
        """Read the file at ``path``.

        Raises:
            FileNotFoundError: If there is no such file.
        """
        ...


class DirectoryFileProvider:
    """Reads table documents from a directory of extracted game data."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def read(self, path: str) -> bytes:
        return (self.root / PurePosixPath(path)).read_bytes()

    def __repr__(self) -> str:
        return f"DirectoryFileProvider({str(self.root)!r})"


def table_name_for(path: str) -> str:
    """Logical table name for a source path: the file name without extension."""
    return PurePosixPath(path).stem


@dataclass(frozen=True)
class TableSource:
    """Where a table comes from and what its rows look like."""

    path: str
    row_type: type[DataTableRow]

    @property
    def name(self) -> str:
        return table_name_for(self.path)


class TableRegistry:
    """A fixed set of named tables, loaded together at startup.

    Table names are case-insensitive. Looking up a table or row that does not
    exist returns None; only loading can fail.
    """

    def __init__(self, tables: Iterable[DataTable[Any]] = ()) -> None:
        self._tables: dict[str, DataTable[Any]] = {}
        for table in tables:
            key = table.name.casefold()
            if key in self._tables:
                raise ValueError(f"Table '{table.name}' is already registered")
            self._tables[key] = table

    @classmethod
    def load(
        cls,
        provider: FileProvider,
        sources: Iterable[TableSource],
        mode: DefaultingMode = DefaultingMode.MERGE,
    ) -> TableRegistry:
        """Load every source table. Any failure aborts the whole load."""
        return cls(cls.load_table(provider, source.path, source.row_type, mode) for source in sources)

    @staticmethod
    def load_table(
        provider: FileProvider,
        path: str,
        row_type: type[RowT],
        mode: DefaultingMode = DefaultingMode.MERGE,
    ) -> DataTable[RowT]:
        """Load a single table from the provider."""
        logger.debug("Reading %s", path)
        data = provider.read(path)
        return deserialize_table(table_name_for(path), data, row_type, mode=mode)

    def get(self, name: str) -> DataTable[Any] | None:
        """Get a table by name."""
        return self._tables.get(name.casefold())

    def get_typed(self, name: str, row_type: type[RowT]) -> DataTable[RowT] | None:
        """Get a table by name, only if its rows are of ``row_type``."""
        table = self.get(name)
        if table is None:
            return None
        if not issubclass(table.row_type, row_type):
            logger.debug(
                "Table %s holds %s rows, not %s",
                table.name,
                table.row_type.__name__,
                row_type.__name__,
            )
            return None
        return table

    def resolve_row(self, table_name: str | None, row_name: str | None, row_type: type[RowT]) -> RowT | None:
        """Find a row by table and row name, checking the table's row type."""
        if not table_name or row_name is None:
            return None
        table = self.get_typed(table_name, row_type)
        if table is None:
            logger.debug("Cannot resolve row %s: no %s table named %s", row_name, row_type.__name__, table_name)
            return None
        row = table.get(row_name)
        if row is None:
            logger.debug("Row %s not found in %s", row_name, table.name)
        return row

    def resolve(self, handle: RowHandle, row_type: type[RowT]) -> RowT | None:
        """Resolve a row handle to the row it names, or None."""
        return self.resolve_row(handle.data_table_name, handle.row_name, row_type)

    def tables(self) -> Mapping[str, DataTable[Any]]:
        """Tables by name, in load order."""
        return {table.name: table for table in self._tables.values()}

    def __getitem__(self, name: str) -> DataTable[Any]:
        table = self.get(name)
        if table is None:
            raise KeyError(name)
        return table

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[str]:
        return (table.name for table in self._tables.values())
