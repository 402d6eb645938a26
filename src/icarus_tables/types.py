"""Type definitions for decoding row JSON into dataclass instances.

A row struct is an ordinary dataclass. The registry turns each field
annotation into a TypeDefinition once per type, and the definitions then do
all of the per-row work: producing zero values, decoding JSON values and
merging partial JSON objects into already defaulted composites.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from icarus_tables.errors import SchemaUnsupportedError, StructuralParseError
from icarus_tables.rows import IGNORE, KEY
from icarus_tables.values import NONE_PATH, ObjectPointer, RowEnum, RowHandle

# Separator between an enum's type and member in exported values (EFoo::Bar)
ENUM_SCOPE = "::"


def normalize_key(key: str) -> str:
    """Normalize a field or JSON key for matching: case and underscores are ignored."""
    return key.replace("_", "").casefold()


def json_type_name(data: Any) -> str:
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, list):
        return "array"
    if isinstance(data, dict):
        return "object"
    return type(data).__name__


def _mismatch(path: str, expected: str, data: Any) -> StructuralParseError:
    return StructuralParseError(f"{path}: expected {expected}, got {json_type_name(data)}")


@dataclass
class TypeDefinition:
    """Base class for all field type definitions."""

    name: str

    def zero_value(self) -> Any:
        """Return the value a field of this type holds when nothing sets it."""
        raise NotImplementedError

    def decode(self, data: Any, path: str) -> Any:
        """Decode a JSON value into a fresh value of this type."""
        raise NotImplementedError

    def decode_key(self, key: str, path: str) -> Any:
        """Decode a JSON object key into a dictionary key of this type."""
        raise SchemaUnsupportedError(f"Type '{self.name}' cannot be used as a dictionary key")

    @property
    def is_composite(self) -> bool:
        return False

    def resolve_base_type(self) -> TypeDefinition:
        """Resolve through Optional wrappers to the underlying type."""
        return self


@dataclass
class PrimitiveTypeDefinition(TypeDefinition):
    """bool, int, float or str."""

    py_type: type

    def zero_value(self) -> Any:
        return self.py_type()

    def decode(self, data: Any, path: str) -> Any:
        if self.py_type is bool:
            if isinstance(data, bool):
                return data
        elif self.py_type is int:
            if isinstance(data, int) and not isinstance(data, bool):
                return data
            if isinstance(data, float) and data.is_integer():
                return int(data)
        elif self.py_type is float:
            if isinstance(data, (int, float)) and not isinstance(data, bool):
                return float(data)
        elif isinstance(data, str):
            return data
        raise _mismatch(path, self.name, data)

    def decode_key(self, key: str, path: str) -> Any:
        if self.py_type is str:
            return key
        if self.py_type is bool:
            lowered = key.casefold()
            if lowered in ("true", "false"):
                return lowered == "true"
            raise StructuralParseError(f"{path}: invalid boolean key {key!r}")
        try:
            return self.py_type(key)
        except ValueError as e:
            raise StructuralParseError(f"{path}: invalid {self.name} key {key!r}") from e


@dataclass
class OptionalTypeDefinition(TypeDefinition):
    """A type that also admits null."""

    base_type: TypeDefinition

    def zero_value(self) -> Any:
        return None

    def decode(self, data: Any, path: str) -> Any:
        if data is None:
            return None
        return self.base_type.decode(data, path)

    def decode_key(self, key: str, path: str) -> Any:
        return self.base_type.decode_key(key, path)

    @property
    def is_composite(self) -> bool:
        return self.base_type.is_composite

    def resolve_base_type(self) -> TypeDefinition:
        return self.base_type.resolve_base_type()


@dataclass
class RawTypeDefinition(TypeDefinition):
    """Untyped JSON, kept exactly as parsed."""

    def zero_value(self) -> Any:
        return None

    def decode(self, data: Any, path: str) -> Any:
        return data

    def decode_key(self, key: str, path: str) -> Any:
        return key


@dataclass
class EnumTypeDefinition(TypeDefinition):
    """A Python Enum, written in JSON by member name (or by value)."""

    enum_cls: type[Enum]

    def zero_value(self) -> Any:
        return next(iter(self.enum_cls))

    def _lookup(self, text: str) -> Enum | None:
        """Find a member by name or string value, ignoring case and any scope prefix."""
        if ENUM_SCOPE in text:
            text = text.rsplit(ENUM_SCOPE, 1)[1]
        member = self.enum_cls.__members__.get(text)
        if member is not None:
            return member
        folded = text.casefold()
        for member_name, member in self.enum_cls.__members__.items():
            if member_name.casefold() == folded:
                return member
        for member in self.enum_cls:
            if isinstance(member.value, str) and member.value.casefold() == folded:
                return member
        return None

    def decode(self, data: Any, path: str) -> Any:
        if isinstance(data, str):
            member = self._lookup(data)
            if member is not None:
                return member
        elif not isinstance(data, bool):
            try:
                return self.enum_cls(data)
            except (ValueError, TypeError):
                pass
        raise _mismatch(path, f"member of {self.name}", data)

    def decode_key(self, key: str, path: str) -> Any:
        member = self._lookup(key)
        if member is None:
            raise StructuralParseError(f"{path}: {key!r} is not a member of {self.name}")
        return member


# Zero values for the compact value types
_VALUE_ZEROS: dict[type, Callable[[], Any]] = {
    RowHandle: RowHandle,
    RowEnum: RowEnum,
    ObjectPointer: lambda: ObjectPointer(NONE_PATH),
}


@dataclass
class ValueTypeDefinition(TypeDefinition):
    """RowHandle, RowEnum or ObjectPointer."""

    value_cls: type

    def zero_value(self) -> Any:
        return _VALUE_ZEROS[self.value_cls]()

    def decode(self, data: Any, path: str) -> Any:
        try:
            return self.value_cls.from_json(data)  # type: ignore[attr-defined]
        except TypeError as e:
            raise _mismatch(path, self.name, data) from e

    def decode_key(self, key: str, path: str) -> Any:
        return self.value_cls.from_json(key)  # type: ignore[attr-defined]


@dataclass
class ArrayTypeDefinition(TypeDefinition):
    """A JSON array decoded into a list, tuple, set or frozenset."""

    element_type: TypeDefinition
    container: type = list

    def zero_value(self) -> Any:
        return self.container()

    def decode(self, data: Any, path: str) -> Any:
        if not isinstance(data, list):
            raise _mismatch(path, "array", data)
        return self.container(
            self.element_type.decode(item, f"{path}[{i}]") for i, item in enumerate(data)
        )


@dataclass
class MapTypeDefinition(TypeDefinition):
    """A JSON object decoded into a dict with typed keys and values."""

    key_type: TypeDefinition
    value_type: TypeDefinition

    def zero_value(self) -> Any:
        return {}

    def decode(self, data: Any, path: str) -> Any:
        if not isinstance(data, dict):
            raise _mismatch(path, "object", data)
        return {
            self.key_type.decode_key(key, path): self.value_type.decode(value, f"{path}.{key}")
            for key, value in data.items()
        }


@dataclass
class FieldDefinition:
    """Definition of a field within a composite type."""

    name: str
    key: str
    type_def: TypeDefinition
    default_value: Any = dataclasses.MISSING
    default_factory: Any = dataclasses.MISSING

    def zero_value(self) -> Any:
        """Return the declared default, or the type's zero value if there is none."""
        if self.default_factory is not dataclasses.MISSING:
            return self.default_factory()
        if self.default_value is not dataclasses.MISSING:
            return self.default_value
        return self.type_def.zero_value()


@dataclass
class CompositeTypeDefinition(TypeDefinition):
    """A dataclass struct decoded from a JSON object.

    JSON keys are matched to fields ignoring case and underscores, so
    ``ItemStaticData`` fills ``item_static_data``. A field can name its key
    explicitly with ``field(metadata={"key": "..."})``. Keys that match no
    field are ignored.
    """

    cls: type = object
    fields: list[FieldDefinition] = field(default_factory=list)
    _fields_by_key: dict[str, FieldDefinition] = field(default_factory=dict, repr=False)

    @property
    def is_composite(self) -> bool:
        return True

    @property
    def is_mutable(self) -> bool:
        params = getattr(self.cls, "__dataclass_params__", None)
        return params is None or not params.frozen

    def add_field(self, field_def: FieldDefinition) -> None:
        """Add a field, rejecting keys that collide once normalized."""
        key = normalize_key(field_def.key)
        existing = self._fields_by_key.get(key)
        if existing is not None:
            raise SchemaUnsupportedError(
                f"Fields '{existing.name}' and '{field_def.name}' of '{self.name}' "
                f"both match JSON key '{field_def.key}'"
            )
        self.fields.append(field_def)
        self._fields_by_key[key] = field_def

    def get_field(self, key: str) -> FieldDefinition | None:
        """Get the field a JSON key refers to."""
        return self._fields_by_key.get(normalize_key(key))

    def instantiate(self, values: dict[str, Any]) -> Any:
        try:
            return self.cls(**values)
        except TypeError as e:
            raise SchemaUnsupportedError(f"Cannot construct '{self.name}': {e}") from e

    def zero_value(self) -> Any:
        return self.instantiate({f.name: f.zero_value() for f in self.fields})

    def decode(self, data: Any, path: str) -> Any:
        if not isinstance(data, dict):
            raise _mismatch(path, f"object for {self.name}", data)
        values = {f.name: f.zero_value() for f in self.fields}
        for key, value in data.items():
            field_def = self.get_field(key)
            if field_def is None:
                continue
            values[field_def.name] = field_def.type_def.decode(value, f"{path}.{key}")
        return self.instantiate(values)

    def overlay(self, target: Any, data: dict[str, Any], path: str, merge: bool = True) -> None:
        """Write the fields present in ``data`` onto an existing instance.

        With ``merge``, a field whose current value is a non-null composite
        and whose JSON value is an object is merged into recursively, keeping
        the sub-fields the JSON does not mention. Frozen composites are
        rebuilt with the merged values. Every other field is replaced with a
        freshly decoded value.
        """
        for key, value in data.items():
            field_def = self.get_field(key)
            if field_def is None:
                continue
            current = getattr(target, field_def.name)
            setattr(target, field_def.name, self._field_value(field_def, current, value, f"{path}.{key}", merge))

    def merged(self, current: Any, data: dict[str, Any], path: str) -> Any:
        """Return ``current`` with ``data`` merged in.

        Mutable instances are updated in place and returned; frozen ones are
        replaced by an updated copy.
        """
        if self.is_mutable:
            self.overlay(current, data, path, merge=True)
            return current
        changes: dict[str, Any] = {}
        for key, value in data.items():
            field_def = self.get_field(key)
            if field_def is None:
                continue
            current_value = changes.get(field_def.name, getattr(current, field_def.name))
            changes[field_def.name] = self._field_value(field_def, current_value, value, f"{path}.{key}", True)
        return dataclasses.replace(current, **changes)

    @staticmethod
    def _field_value(field_def: FieldDefinition, current: Any, value: Any, path: str, merge: bool) -> Any:
        base = field_def.type_def.resolve_base_type()
        if merge and isinstance(base, CompositeTypeDefinition) and current is not None and isinstance(value, dict):
            return base.merged(current, value, path)
        return field_def.type_def.decode(value, path)


_PRIMITIVES: dict[type, str] = {
    bool: "bool",
    int: "int",
    float: "float",
    str: "str",
}

_ARRAY_CONTAINERS: tuple[type, ...] = (list, tuple, set, frozenset)


class TypeRegistry:
    """Registry of resolved field types, keyed by annotation."""

    def __init__(self) -> None:
        self._types: dict[Any, TypeDefinition] = {}

    def get(self, annotation: Any) -> TypeDefinition | None:
        """Get an already resolved type."""
        return self._types.get(annotation)

    def resolve(self, annotation: Any) -> TypeDefinition:
        """Resolve a field annotation to a type definition.

        Raises:
            SchemaUnsupportedError: If the annotation describes a shape rows
                cannot hold.
        """
        existing = self._types.get(annotation)
        if existing is not None:
            return existing

        if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
            return self.composite(annotation)

        type_def = self._build(annotation)
        self._types[annotation] = type_def
        return type_def

    def composite(self, cls: type) -> CompositeTypeDefinition:
        """Resolve a dataclass, supporting self and mutual references."""
        existing = self._types.get(cls)
        if isinstance(existing, CompositeTypeDefinition):
            return existing
        if not dataclasses.is_dataclass(cls):
            raise SchemaUnsupportedError(f"'{cls.__qualname__}' is not a dataclass")

        # Register before resolving fields so recursive references find it
        composite = CompositeTypeDefinition(name=cls.__qualname__, cls=cls)
        self._types[cls] = composite
        try:
            hints = typing.get_type_hints(cls)
            for f in dataclasses.fields(cls):
                if not f.init or f.metadata.get(IGNORE):
                    continue
                composite.add_field(
                    FieldDefinition(
                        name=f.name,
                        key=f.metadata.get(KEY, f.name),
                        type_def=self.resolve(hints[f.name]),
                        default_value=f.default,
                        default_factory=f.default_factory,
                    )
                )
        except NameError as e:
            del self._types[cls]
            raise SchemaUnsupportedError(f"Cannot resolve annotations of '{cls.__qualname__}': {e}") from e
        except SchemaUnsupportedError:
            del self._types[cls]
            raise
        return composite

    def _build(self, annotation: Any) -> TypeDefinition:
        if annotation is Any:
            return RawTypeDefinition(name="any")
        if annotation in _PRIMITIVES:
            return PrimitiveTypeDefinition(name=_PRIMITIVES[annotation], py_type=annotation)
        if annotation in _VALUE_ZEROS:
            return ValueTypeDefinition(name=annotation.__name__, value_cls=annotation)
        if annotation is list:
            return self._build(list[Any])
        if annotation is dict:
            return self._build(dict[str, Any])

        origin = typing.get_origin(annotation)
        args = typing.get_args(annotation)

        if origin is None and isinstance(annotation, type) and issubclass(annotation, Enum):
            return EnumTypeDefinition(name=annotation.__name__, enum_cls=annotation)

        if origin in (typing.Union, types.UnionType):
            non_null = [a for a in args if a is not type(None)]
            if len(non_null) == 1 and len(args) == 2:
                base = self.resolve(non_null[0])
                return OptionalTypeDefinition(name=f"{base.name} | None", base_type=base)
            raise SchemaUnsupportedError(f"Unsupported union field type: {annotation}")

        if origin in _ARRAY_CONTAINERS:
            if origin is tuple:
                if len(args) != 2 or args[1] is not Ellipsis:
                    raise SchemaUnsupportedError(f"Only variadic tuples are supported: {annotation}")
                args = args[:1]
            element = self.resolve(args[0]) if args else self.resolve(Any)
            return ArrayTypeDefinition(
                name=f"{origin.__name__}[{element.name}]",
                element_type=element,
                container=origin,
            )

        if origin is dict:
            key_type = self.resolve(args[0])
            value_type = self.resolve(args[1])
            if key_type.resolve_base_type().is_composite or isinstance(
                key_type.resolve_base_type(), (ArrayTypeDefinition, MapTypeDefinition)
            ):
                raise SchemaUnsupportedError(f"Unsupported dictionary key type: {key_type.name}")
            return MapTypeDefinition(
                name=f"dict[{key_type.name}, {value_type.name}]",
                key_type=key_type,
                value_type=value_type,
            )

        raise SchemaUnsupportedError(f"Unsupported field type: {annotation!r}")

    def __contains__(self, annotation: Any) -> bool:
        return annotation in self._types
