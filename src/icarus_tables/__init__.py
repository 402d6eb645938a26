"""Icarus Tables - typed loading of the game's JSON data tables."""

from icarus_tables.copier import Cloneable, clone_value
from icarus_tables.deserializer import DefaultingMode, deserialize_table
from icarus_tables.errors import SchemaUnsupportedError, StructuralParseError, TableError
from icarus_tables.registry import DirectoryFileProvider, FileProvider, TableRegistry, TableSource
from icarus_tables.rows import DataTableRow
from icarus_tables.table import DataTable
from icarus_tables.types import (
    ArrayTypeDefinition,
    CompositeTypeDefinition,
    FieldDefinition,
    TypeDefinition,
    TypeRegistry,
)
from icarus_tables.values import ObjectPointer, RowEnum, RowHandle

__all__ = [
    # Main API
    "DataTable",
    "DataTableRow",
    "deserialize_table",
    "DefaultingMode",
    "TableRegistry",
    "TableSource",
    "FileProvider",
    "DirectoryFileProvider",
    # Values
    "ObjectPointer",
    "RowEnum",
    "RowHandle",
    # Copying
    "Cloneable",
    "clone_value",
    # Type definitions
    "TypeDefinition",
    "ArrayTypeDefinition",
    "CompositeTypeDefinition",
    "FieldDefinition",
    "TypeRegistry",
    # Errors
    "TableError",
    "StructuralParseError",
    "SchemaUnsupportedError",
]

__version__ = "0.1.0"
