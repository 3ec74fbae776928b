"""
JSON codec shared by the session stores and typed keys.

Values are stored as JSON text. Serialization goes through a pydantic
TypeAdapter for the value type so the stored shape always matches the
type it is read back as.
"""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter


@lru_cache(maxsize=256)
def adapter_for(value_type: Any) -> TypeAdapter:
    """Get the cached TypeAdapter for a value type."""
    return TypeAdapter(value_type)


def dumps(value: Any, value_type: Any = Any) -> str:
    """
    Serialize a value to JSON text as ``value_type``.

    Raises:
        PydanticSerializationError: If the value does not fit the type
        ValueError: On circular references
    """
    return adapter_for(value_type).dump_json(value, warnings="error").decode("utf-8")


def loads(raw: Any, value_type: Any = Any) -> Any:
    """
    Deserialize JSON text as ``value_type``.

    Validation is strict: a stored string never turns into a number.

    Raises:
        ValidationError: If the text is not valid JSON or not a ``value_type``
    """
    return adapter_for(value_type).validate_json(raw, strict=True)
