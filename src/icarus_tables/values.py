"""Compact value types found in data table fields.

These are the struct and pointer encodings the game's exporter writes into
its JSON tables. Each type accepts both the JSON object form and the compact
string form, because dictionary keys can only ever be strings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

from icarus_tables.parsing import get_value_parser

logger = logging.getLogger(__name__)

# Engine-internal objects (native classes, engine content)
ENGINE_ROOT = "/Script/"

# Game content as seen by the engine, and where it lives inside the packages
GAME_ROOT = "/Game/"
CONTENT_ROOT = "Icarus/Content/"

ASSET_EXTENSION = "uasset"

NONE_PATH = "None"


def _parse_properties(text: str, type_name: str) -> dict[str, str]:
    """Parse a compact property list, returning no properties when malformed."""
    try:
        return get_value_parser().parse_dict(text)
    except SyntaxError as e:
        logger.debug("Malformed %s value %r: %s", type_name, text, e)
        return {}


@dataclass(frozen=True)
class RowHandle:
    """A by-name reference to a row in another data table."""

    row_name: str | None = None
    data_table_name: str | None = None

    INVALID: ClassVar[RowHandle]

    @classmethod
    def parse(cls, text: str) -> RowHandle:
        """Parse ``(RowName="X",DataTableName="Y")``.

        Unknown keys are ignored. Malformed text yields a handle with unset
        components instead of raising.
        """
        props = _parse_properties(text, cls.__name__)
        return cls(
            row_name=props.get("RowName"),
            data_table_name=props.get("DataTableName"),
        )

    @classmethod
    def from_json(cls, data: Any) -> RowHandle:
        """Build a handle from either its JSON object or compact string form."""
        if isinstance(data, str):
            return cls.parse(data)
        if isinstance(data, dict):
            return cls(
                row_name=data.get("RowName"),
                data_table_name=data.get("DataTableName"),
            )
        raise TypeError(f"Expected object or string for {cls.__name__}, got {type(data).__name__}")

    @property
    def is_set(self) -> bool:
        """Whether both the table and row names are present."""
        return bool(self.row_name) and bool(self.data_table_name)

    def __str__(self) -> str:
        return self.row_name if self.row_name is not None else "None"


RowHandle.INVALID = RowHandle(row_name="Invalid", data_table_name="Invalid")


@dataclass(frozen=True)
class RowEnum:
    """A string tag naming a row, used where a fixed enum is too rigid."""

    value: str | None = None

    @classmethod
    def parse(cls, text: str) -> RowEnum:
        """Parse ``(Value="X")``; malformed text yields an unset value."""
        props = _parse_properties(text, cls.__name__)
        return cls(value=props.get("Value"))

    @classmethod
    def from_json(cls, data: Any) -> RowEnum:
        if isinstance(data, str):
            return cls.parse(data)
        if isinstance(data, dict):
            return cls(value=data.get("Value"))
        raise TypeError(f"Expected object or string for {cls.__name__}, got {type(data).__name__}")

    def __str__(self) -> str:
        return self.value if self.value is not None else "None"


@dataclass(frozen=True, order=True, init=False)
class ObjectPointer:
    """Reference to an asset, written as ``Type'Path'`` or ``'Path'``.

    Only the raw text takes part in equality, ordering and hashing, so two
    pointers that parse differently but read the same are the same key.
    """

    raw: str
    type_name: str | None = field(default=None, compare=False)
    path: str | None = field(default=None, compare=False)

    def __init__(self, text: str) -> None:
        raw = text.strip()
        object.__setattr__(self, "raw", raw)

        parts = raw.split("'")
        if len(parts) == 1:
            # Soft pointer
            object.__setattr__(self, "type_name", None)
            object.__setattr__(self, "path", raw)
        elif len(parts) == 3:
            object.__setattr__(self, "type_name", parts[0] or None)
            object.__setattr__(self, "path", parts[1])
        else:
            logger.debug("Unrecognized object pointer %r; keeping raw text only", raw)
            object.__setattr__(self, "type_name", None)
            object.__setattr__(self, "path", None)

    @classmethod
    def from_json(cls, data: Any) -> ObjectPointer:
        if isinstance(data, str):
            return cls(data)
        raise TypeError(f"Expected string for {cls.__name__}, got {type(data).__name__}")

    @property
    def is_hard(self) -> bool:
        return self.type_name is not None

    @property
    def is_none(self) -> bool:
        """Whether this is the exporter's null pointer."""
        return self.raw.casefold() == NONE_PATH.casefold()

    def get_asset_path(self, extension: str | None = None) -> str | None:
        """Convert the pointer into a package path within the game files.

        Args:
            extension: Optional file extension (without the dot) to append,
                usually ``ASSET_EXTENSION``.

        Returns:
            The package path, the unchanged path for engine objects and the
            null pointer, or None if the pointer has no path.
        """
        path = self.path
        if path is None:
            return None
        if path.casefold() == NONE_PATH.casefold():
            return path
        if path.startswith(ENGINE_ROOT):
            return path

        dot = path.rfind(".")
        if dot > path.rfind("/"):
            path = path[:dot]

        if path.startswith(GAME_ROOT):
            path = CONTENT_ROOT + path[len(GAME_ROOT):]

        if extension:
            path = f"{path}.{extension}"
        return path

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"ObjectPointer({self.raw!r})"
