"""Serialization benchmark package: fixture, field tables and codecs."""

from .fixture import Fixture
from .fields import FieldDescriptor, FieldKind, UnsupportedFieldType, describe, field_map

__all__ = [
    "Fixture",
    "FieldDescriptor",
    "FieldKind",
    "UnsupportedFieldType",
    "describe",
    "field_map",
]
