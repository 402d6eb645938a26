"""Read-only container for a deserialized data table."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from icarus_tables.errors import StructuralParseError
from icarus_tables.rows import DataTableRow

if TYPE_CHECKING:
    from icarus_tables.deserializer import DefaultingMode

RowT = TypeVar("RowT", bound=DataTableRow)


def _fold(name: str) -> str:
    return name.casefold()


class DataTable(Generic[RowT]):
    """An ordered, uniquely named collection of rows of one struct type.

    Rows can be reached by position or by name; names compare
    case-insensitively. The table never changes after construction, so the
    row list and both name indexes always agree.
    """

    __slots__ = (
        "_name",
        "_row_type",
        "_row_struct",
        "_generate_enum",
        "_columns",
        "_defaults",
        "_rows",
        "_row_map",
        "_index_map",
    )

    def __init__(
        self,
        name: str,
        row_type: type[RowT],
        rows: Iterable[RowT],
        defaults: RowT | None = None,
        row_struct: str | None = None,
        generate_enum: bool = False,
        columns: Any = None,
    ) -> None:
        """Initialize a table.

        Args:
            name: Table name, usually the source file name without extension.
            row_type: Dataclass every row is an instance of.
            rows: Rows in table order.
            defaults: The row every other row was defaulted from.
            row_struct: Name of the game's row struct.
            generate_enum: The document's enum generation flag.
            columns: Column metadata, kept as parsed.

        Raises:
            StructuralParseError: If two rows share a name.
        """
        row_list: list[RowT] = []
        row_map: dict[str, RowT] = {}
        index_map: dict[str, int] = {}
        for row in rows:
            key = _fold(row.name)
            if key in row_map:
                raise StructuralParseError(f"Duplicate row name '{row.name}'", name)
            index_map[key] = len(row_list)
            row_list.append(row)
            row_map[key] = row

        self._name = name
        self._row_type = row_type
        self._row_struct = row_struct
        self._generate_enum = generate_enum
        self._columns = columns
        self._defaults = defaults
        self._rows: tuple[RowT, ...] = tuple(row_list)
        self._row_map = row_map
        self._index_map = index_map

    @classmethod
    def deserialize(
        cls,
        name: str,
        data: str | bytes,
        row_type: type[RowT],
        mode: DefaultingMode | None = None,
    ) -> DataTable[RowT]:
        """Parse a table document. See ``deserialize_table``."""
        from icarus_tables.deserializer import DefaultingMode, deserialize_table

        return deserialize_table(name, data, row_type, mode=mode or DefaultingMode.MERGE)

    @property
    def name(self) -> str:
        return self._name

    @property
    def row_type(self) -> type[RowT]:
        return self._row_type

    @property
    def row_struct(self) -> str | None:
        return self._row_struct

    @property
    def generate_enum(self) -> bool:
        return self._generate_enum

    @property
    def columns(self) -> Any:
        return self._columns

    @property
    def defaults(self) -> RowT | None:
        return self._defaults

    @property
    def count(self) -> int:
        """Return the number of rows in the table."""
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    @overload
    def __getitem__(self, key: int) -> RowT: ...

    @overload
    def __getitem__(self, key: str) -> RowT: ...

    def __getitem__(self, key: int | str) -> RowT:
        """Get a row by position or by name.

        Raises:
            IndexError: If the position is out of range.
            KeyError: If no row has the name.
        """
        if isinstance(key, str):
            row = self._row_map.get(_fold(key))
            if row is None:
                raise KeyError(key)
            return row
        if isinstance(key, int):
            return self._rows[key]
        raise TypeError(f"Row keys must be str or int, not {type(key).__name__}")

    def get(self, key: int | str, default: Any = None) -> RowT | Any:
        """Get a row by name or position, or ``default`` if there is none."""
        if isinstance(key, str):
            return self._row_map.get(_fold(key), default)
        if isinstance(key, int) and 0 <= key < len(self._rows):
            return self._rows[key]
        return default

    def __contains__(self, item: object) -> bool:
        """Check for a row name, or for a row instance held by this table."""
        if isinstance(item, str):
            return _fold(item) in self._row_map
        if isinstance(item, DataTableRow):
            return self.index_of(item) >= 0
        return False

    def index_of(self, key: str | RowT) -> int:
        """Return the position of a row, given its name or the row itself, or -1."""
        if isinstance(key, str):
            return self._index_map.get(_fold(key), -1)
        index = self._index_map.get(_fold(key.name), -1)
        if index >= 0 and self._rows[index] is not key:
            return -1
        return index

    def keys(self) -> tuple[str, ...]:
        """Row names in table order."""
        return tuple(row.name for row in self._rows)

    def values(self) -> tuple[RowT, ...]:
        """Rows in table order."""
        return self._rows

    def items(self) -> Iterator[tuple[str, RowT]]:
        """Iterate ``(name, row)`` pairs in table order."""
        for row in self._rows:
            yield row.name, row

    def __iter__(self) -> Iterator[RowT]:
        return iter(self._rows)

    def __str__(self) -> str:
        return f"{self._name or 'Unnamed'} ({self._row_struct or 'Unknown'}) - {len(self._rows)} Rows"

    def __repr__(self) -> str:
        return f"DataTable({self._name!r}, {self._row_type.__name__}, rows={len(self._rows)})"
