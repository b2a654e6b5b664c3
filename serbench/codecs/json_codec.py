"""pydantic-backed JSON codec."""

from typing import Any

from pydantic import TypeAdapter

from serbench.fields import UnsupportedFieldType, describe


class JsonCodec:
    """
    Compact JSON codec bound to one target type.

    The adapter is built once. Construction checks that the adapter enumerates
    every declared field of the type, so nothing is dropped from the document.
    """

    name = "JSON (pydantic)"

    def __init__(self, cls: type):
        self.cls = cls
        self.adapter = TypeAdapter(cls)

        declared = [descriptor.name for descriptor in describe(cls)]
        properties = list(self.adapter.json_schema().get("properties", {}))
        if sorted(properties) != sorted(declared):
            raise UnsupportedFieldType(
                f"JSON adapter for {cls.__name__} covers {properties}, expected {declared}"
            )

    def serialize(self, obj: Any) -> str:
        return self.adapter.dump_json(obj).decode("utf-8")

    def deserialize(self, text: str) -> Any:
        return self.adapter.validate_json(text)
