"""Base class for data table row structs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Field metadata flag: the field is never read from row JSON
IGNORE = "ignore"

# Field metadata key: explicit JSON key for a field
KEY = "key"

DEPRECATED_FLAG = "bIsDeprecated"


@dataclass(kw_only=True)
class DataTableRow:
    """A named row in a data table.

    Subclasses declare their columns as dataclass fields. ``name`` and
    ``metadata`` are filled from the row's ``Name`` and ``Metadata``
    properties and are never overlaid as ordinary fields.
    """

    name: str = field(default="", metadata={IGNORE: True})
    metadata: dict[str, Any] | None = field(default=None, metadata={IGNORE: True})

    @property
    def is_deprecated(self) -> bool:
        """Whether the row's metadata flags it as deprecated."""
        if self.metadata is None:
            return False
        return self.metadata.get(DEPRECATED_FLAG) is True

    def __str__(self) -> str:
        return self.name
