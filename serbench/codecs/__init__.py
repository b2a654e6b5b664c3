"""Codecs benchmarked against the shared fixture."""

from .csv_codec import CsvCodec, CsvFormatError, deserialize, parse_value, serialize
from .json_codec import JsonCodec

__all__ = [
    "CsvCodec",
    "CsvFormatError",
    "JsonCodec",
    "deserialize",
    "parse_value",
    "serialize",
]
