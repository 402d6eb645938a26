"""Deep copying of row default instances.

Every row starts from its own copy of the table's Defaults row, so writing a
row's overrides never touches the shared Defaults. The copy strategy is
chosen once per runtime type, in priority order:

1. ``None`` is returned as is.
2. Objects with a ``clone()`` method copy themselves.
3. Immutable scalars and the compact value types are shared.
4. Types defining ``__copy__`` are copied with it.
5. Collections are rebuilt from their own elements. The elements themselves
   are shared, not copied.
6. Dataclass instances are shallow-copied, then every public field is copied
   recursively. Frozen dataclasses are rebuilt with copies of their public
   init fields instead, since they may still hold mutable collections.

Only dataclasses count as composites. Other objects, including plain
attribute bags such as ``types.SimpleNamespace``, cannot be defaulted safely
and fail the table load.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Collection
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from icarus_tables.errors import SchemaUnsupportedError
from icarus_tables.values import ObjectPointer, RowEnum, RowHandle

T = TypeVar("T")

SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Enum,
    RowHandle,
    RowEnum,
    ObjectPointer,
)


@runtime_checkable
class Cloneable(Protocol):
    """A type that knows how to deep copy itself."""

    def clone(self) -> Any: ...


def clone_value(value: T) -> T:
    """Return an independent deep copy of a row or field value.

    Raises:
        SchemaUnsupportedError: If the value's type has no copy strategy.
    """
    if value is None:
        return value
    return _cloner_for(type(value))(value)


def _is_frozen_dataclass(cls: type) -> bool:
    params = getattr(cls, "__dataclass_params__", None)
    return params is not None and params.frozen


@lru_cache(maxsize=None)
def _cloner_for(cls: type) -> Callable[[Any], Any]:
    """Resolve the copy strategy for a type."""
    if callable(getattr(cls, "clone", None)):
        return _clone_self
    if issubclass(cls, SCALAR_TYPES):
        return _identity
    if hasattr(cls, "__copy__"):
        return copy.copy
    if issubclass(cls, Collection):
        return _rebuild_collection
    if _is_frozen_dataclass(cls):
        return _rebuild_frozen
    if dataclasses.is_dataclass(cls):
        return _clone_composite
    raise SchemaUnsupportedError(f"Cannot copy default values of type '{cls.__qualname__}'")


def _identity(value: Any) -> Any:
    return value


def _clone_self(value: Cloneable) -> Any:
    return value.clone()


def _rebuild_collection(value: Collection[Any]) -> Any:
    # Only the shell is new; two rows still share mutable elements.
    try:
        return type(value)(value)  # type: ignore[call-arg]
    except TypeError as e:
        raise SchemaUnsupportedError(
            f"Cannot rebuild collection of type '{type(value).__qualname__}'"
        ) from e


def _clone_composite(value: Any) -> Any:
    duplicate = copy.copy(value)
    for f in dataclasses.fields(value):
        if f.name.startswith("_"):
            continue
        setattr(duplicate, f.name, clone_value(getattr(value, f.name)))
    return duplicate


def _rebuild_frozen(value: Any) -> Any:
    changes = {
        f.name: clone_value(getattr(value, f.name))
        for f in dataclasses.fields(value)
        if f.init and not f.name.startswith("_")
    }
    return dataclasses.replace(value, **changes)
