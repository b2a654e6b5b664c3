"""
Two-line CSV codec.

Line 1 holds the field names, line 2 the values, both comma-separated and in
declaration order. Integer sequences are packed into one cell with ``;``::

    i1,i2,i3,i4,i5,mas
    1,2,3,4,5,1;2

Decoding matches names, not positions, so a consistent reordering of both rows
still works. Names the target type does not declare are skipped, and extra
cells on the longer row are dropped without error.
"""

import os
import re
from typing import Any, List, Type, TypeVar

from serbench.fields import FieldDescriptor, FieldKind, describe, field_map

T = TypeVar("T")

_LINE_SPLIT = re.compile(r"\r\n|\n")
_INTEGER = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)

_EMPTY_VALUES = {
    FieldKind.INTEGER: 0,
    FieldKind.FLOAT: 0.0,
    FieldKind.BOOLEAN: False,
    FieldKind.TEXT: "",
}


class CsvFormatError(ValueError):
    """Raised when CSV text cannot be decoded."""


def _format_value(descriptor: FieldDescriptor, value: Any) -> str:
    if value is None:
        return ""
    if descriptor.kind is FieldKind.INTEGER_SEQUENCE:
        return ";".join(str(item) for item in value)
    return str(value)


def serialize(obj: Any) -> str:
    """Encode *obj* as a header line and a value line."""
    table = describe(type(obj))
    header = ",".join(descriptor.name for descriptor in table)
    values = ",".join(_format_value(descriptor, descriptor.get(obj)) for descriptor in table)
    return header + os.linesep + values


def _parse_int(raw: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise CsvFormatError(f"Invalid integer: {raw!r}")
    return int(raw)


def parse_value(raw: str, descriptor: FieldDescriptor) -> Any:
    """Convert one raw cell according to the field's kind."""
    kind = descriptor.kind

    if raw == "":
        if descriptor.optional:
            return None
        if kind is FieldKind.INTEGER_SEQUENCE:
            return descriptor.container()
        return _EMPTY_VALUES[kind]

    if kind is FieldKind.INTEGER:
        return _parse_int(raw)

    if kind is FieldKind.INTEGER_SEQUENCE:
        return descriptor.container(_parse_int(part) for part in raw.split(";") if part)

    if kind is FieldKind.FLOAT:
        try:
            return float(raw)
        except ValueError as e:
            raise CsvFormatError(f"Invalid number: {raw!r}") from e

    if kind is FieldKind.BOOLEAN:
        lowered = raw.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise CsvFormatError(f"Invalid boolean: {raw!r}")

    return raw


def split_rows(text: str) -> List[str]:
    """Split on ``\\r\\n``/``\\n`` and drop empty lines."""
    return [line for line in _LINE_SPLIT.split(text) if line]


def deserialize(text: str, cls: Type[T]) -> T:
    """Decode *text* into a new instance of *cls*."""
    lines = split_rows(text)
    if len(lines) < 2:
        raise CsvFormatError("CSV must contain 2 lines: header + values")

    names = lines[0].split(",")
    values = lines[1].split(",")

    obj = cls()
    fields = field_map(cls)

    for name, raw in zip(names, values):
        descriptor = fields.get(name)
        if descriptor is None:
            continue
        descriptor.set(obj, parse_value(raw, descriptor))

    return obj


class CsvCodec:
    """CSV codec bound to one target type."""

    name = "CSV"

    def __init__(self, cls: type):
        self.cls = cls
        # Fail early on unsupported field types
        describe(cls)

    def serialize(self, obj: Any) -> str:
        return serialize(obj)

    def deserialize(self, text: str) -> Any:
        return deserialize(text, self.cls)
