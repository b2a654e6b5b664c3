"""
Field descriptor tables for dataclass types.

The codecs never inspect instances directly. Each type is described once by an
ordered tuple of descriptors (declaration order), and every read, write and
value conversion goes through that table.
"""

import dataclasses
import types
import typing
from collections import abc
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple


class UnsupportedFieldType(TypeError):
    """Raised when a type has a field the codecs cannot handle."""


class FieldKind(Enum):
    """Closed set of value kinds the codecs know how to convert."""

    INTEGER = "integer"
    INTEGER_SEQUENCE = "integer_sequence"
    TEXT = "text"
    FLOAT = "float"
    BOOLEAN = "boolean"


_SCALAR_KINDS = {
    int: FieldKind.INTEGER,
    str: FieldKind.TEXT,
    float: FieldKind.FLOAT,
    bool: FieldKind.BOOLEAN,
}

_SEQUENCE_ORIGINS = (list, tuple, abc.Sequence)
_UNION_ORIGINS = (typing.Union, types.UnionType)


@dataclass(frozen=True)
class FieldDescriptor:
    """One named, typed field of a described type.

    ``container`` is the type decoded integer sequences are built as.
    """

    name: str
    kind: FieldKind
    optional: bool = False
    container: type = list

    def get(self, obj: Any) -> Any:
        return getattr(obj, self.name)

    def set(self, obj: Any, value: Any) -> None:
        setattr(obj, self.name, value)


def _unwrap_optional(annotation) -> Tuple[Any, bool]:
    """Strip ``Optional[X]`` down to ``X``."""
    if typing.get_origin(annotation) in _UNION_ORIGINS:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1 and len(typing.get_args(annotation)) == 2:
            return args[0], True
    return annotation, False


def _sequence_container(annotation) -> Optional[type]:
    """Container type for an integer-sequence annotation, else None."""
    if annotation is list:
        return list
    origin = typing.get_origin(annotation)
    if origin not in _SEQUENCE_ORIGINS:
        return None
    args = typing.get_args(annotation)
    if origin is tuple:
        # Only the homogeneous form Tuple[int, ...]
        return tuple if args == (int, Ellipsis) else None
    return list if args == (int,) else None


def _descriptor_for(name: str, annotation) -> FieldDescriptor:
    base, optional = _unwrap_optional(annotation)

    # Exact type lookup: bool never maps to INTEGER
    if base in _SCALAR_KINDS:
        return FieldDescriptor(name, _SCALAR_KINDS[base], optional)
    container = _sequence_container(base)
    if container is not None:
        return FieldDescriptor(name, FieldKind.INTEGER_SEQUENCE, optional, container)

    raise UnsupportedFieldType(f"Field {name!r} has unsupported type {annotation!r}")


@lru_cache(maxsize=None)
def describe(cls: type) -> Tuple[FieldDescriptor, ...]:
    """Build the ordered descriptor table for a dataclass type."""
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise UnsupportedFieldType(f"{cls!r} is not a dataclass type")

    hints = typing.get_type_hints(cls)
    return tuple(_descriptor_for(dc_field.name, hints[dc_field.name]) for dc_field in dataclasses.fields(cls))


@lru_cache(maxsize=None)
def field_map(cls: type) -> Dict[str, FieldDescriptor]:
    """Exact, case-sensitive name lookup over ``describe(cls)``."""
    return {descriptor.name: descriptor for descriptor in describe(cls)}
