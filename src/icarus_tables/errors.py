"""Exceptions raised while loading data tables."""

from __future__ import annotations


class TableError(Exception):
    """Base class for fatal data table load errors."""


class StructuralParseError(TableError, ValueError):
    """A table document does not have the expected shape."""

    def __init__(self, message: str, table_name: str | None = None) -> None:
        if table_name:
            message = f"{table_name}: {message}"
        super().__init__(message)
        self.table_name = table_name


class SchemaUnsupportedError(TableError, TypeError):
    """A row type declares a field shape the loader cannot handle."""
