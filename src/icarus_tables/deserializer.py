"""Deserialization of data table documents.

A table document looks like this:

    {
        "RowStruct": "/Script/Icarus.ItemableData",
        "GenerateEnum": false,
        "Columns": [...],
        "Defaults": {"Weight": 100, "MaxStack": 1},
        "Rows": [
            {"Name": "Wood", "Weight": 50, "MaxStack": 100},
            {"Name": "Stone", "Metadata": {"bIsDeprecated": true}}
        ]
    }

Each row starts as a copy of ``Defaults`` and the row's own properties are
written over it, so a row only lists what differs from the defaults.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

from icarus_tables.copier import clone_value
from icarus_tables.errors import SchemaUnsupportedError, StructuralParseError
from icarus_tables.rows import DataTableRow
from icarus_tables.table import DataTable, RowT
from icarus_tables.types import CompositeTypeDefinition, TypeRegistry, json_type_name

logger = logging.getLogger(__name__)

ROW_STRUCT_KEY = "RowStruct"
GENERATE_ENUM_KEY = "GenerateEnum"
COLUMNS_KEY = "Columns"
DEFAULTS_KEY = "Defaults"
ROWS_KEY = "Rows"

NAME_KEY = "Name"
METADATA_KEY = "Metadata"


class DefaultingMode(Enum):
    """How a row's properties are applied over its copy of the defaults."""

    # Objects are merged into defaulted structs, keeping unmentioned sub-fields
    MERGE = "merge"
    # Every mentioned field is replaced outright
    REPLACE = "replace"


_registry = TypeRegistry()


def deserialize_table(
    name: str,
    data: str | bytes,
    row_type: type[RowT],
    mode: DefaultingMode = DefaultingMode.MERGE,
    registry: TypeRegistry | None = None,
) -> DataTable[RowT]:
    """Parse a table document into a DataTable.

    Args:
        name: Name to give the table.
        data: The JSON document, as text or UTF-8 bytes.
        row_type: DataTableRow subclass describing the rows.
        mode: How row properties are applied over the defaults.
        registry: Type registry to resolve row fields with. A shared
            registry is used by default.

    Returns:
        The fully populated table.

    Raises:
        StructuralParseError: If the document is not a valid table.
        SchemaUnsupportedError: If ``row_type`` has fields the loader
            cannot decode or copy.
    """
    if not (isinstance(row_type, type) and issubclass(row_type, DataTableRow)):
        raise SchemaUnsupportedError(f"Row type {row_type!r} is not a DataTableRow subclass")

    row_def = (registry or _registry).composite(row_type)
    try:
        document = _load_document(data)
        table = _read_table(name, document, row_type, row_def, mode)
    except StructuralParseError as e:
        if e.table_name is None:
            raise StructuralParseError(str(e), name) from e
        raise

    logger.info("Loaded %s", table)
    return table


def _load_document(data: str | bytes) -> dict[str, Any]:
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise StructuralParseError(f"Table is not valid UTF-8: {e}") from e
    try:
        document = json.loads(data)
    except json.JSONDecodeError as e:
        raise StructuralParseError(f"Table is not valid JSON: {e}") from e
    if not isinstance(document, dict):
        raise StructuralParseError(f"Expected a table object, got {json_type_name(document)}")
    return document


def _read_table(
    name: str,
    document: dict[str, Any],
    row_type: type[RowT],
    row_def: CompositeTypeDefinition,
    mode: DefaultingMode,
) -> DataTable[RowT]:
    row_struct = document.get(ROW_STRUCT_KEY)
    if row_struct is not None and not isinstance(row_struct, str):
        raise StructuralParseError(f"{ROW_STRUCT_KEY} must be a string")

    generate_enum = document.get(GENERATE_ENUM_KEY)
    if generate_enum is None:
        generate_enum = False
    elif not isinstance(generate_enum, bool):
        raise StructuralParseError(f"{GENERATE_ENUM_KEY} must be a boolean")

    defaults_data = document.get(DEFAULTS_KEY)
    if defaults_data is None:
        logger.debug("Table %s has no defaults; using zero values", name)
        defaults_data = {}
    defaults = _read_defaults(row_def, defaults_data)

    # Copy once up front so unsupported field shapes fail even without rows
    clone_value(defaults)

    rows_data = document.get(ROWS_KEY)
    if not isinstance(rows_data, list):
        raise StructuralParseError(f"Expected a '{ROWS_KEY}' array")

    merge = mode is DefaultingMode.MERGE
    rows = [_read_row(row_def, defaults, row_data, index, merge) for index, row_data in enumerate(rows_data)]

    return DataTable(
        name=name,
        row_type=row_type,
        rows=rows,
        defaults=defaults,
        row_struct=row_struct,
        generate_enum=generate_enum,
        columns=document.get(COLUMNS_KEY),
    )


def _read_defaults(row_def: CompositeTypeDefinition, data: Any) -> Any:
    defaults = row_def.decode(data, DEFAULTS_KEY)
    name = data.get(NAME_KEY)
    if name is not None:
        defaults.name = str(name)
    defaults.metadata = _read_metadata(data, DEFAULTS_KEY)
    return defaults


def _read_metadata(data: dict[str, Any], path: str) -> dict[str, Any] | None:
    metadata = data.get(METADATA_KEY)
    if metadata is not None and not isinstance(metadata, dict):
        raise StructuralParseError(f"{path}.{METADATA_KEY}: expected object, got {json_type_name(metadata)}")
    return metadata


def _read_row(
    row_def: CompositeTypeDefinition,
    defaults: Any,
    data: Any,
    index: int,
    merge: bool,
) -> Any:
    """Build one row from its copy of the defaults and its JSON properties."""
    path = f"{ROWS_KEY}[{index}]"
    if not isinstance(data, dict):
        raise StructuralParseError(f"{path}: expected object, got {json_type_name(data)}")

    name = data.get(NAME_KEY)
    if name is None:
        raise StructuralParseError(f"{path}: data table row has no name")
    name = str(name)

    row = clone_value(defaults)
    row.name = name
    row.metadata = _read_metadata(data, name)
    row_def.overlay(row, data, name, merge=merge)
    return row
