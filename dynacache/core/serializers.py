# ==============================================================================
# Value Serializers
# ==============================================================================
"""
Serializers for opaque (non-numeric) cache values.

Numeric values never reach a serializer: they are stored as DynamoDB numbers
so that `increment`/`decrement` can update them in place. Everything else is
turned into bytes here and stored as a binary attribute.

Available serializers:
- pickle: Python-native object serialization (default)
- json: JSON text, for values shared with non-Python readers
"""

import json
import pickle
from abc import ABC, abstractmethod
from typing import Any


class Serializer(ABC):
    """Converts opaque values to and from bytes."""

    name: str = ""

    @abstractmethod
    def dumps(self, value: Any) -> bytes:
        """Serialize a value to bytes."""
        ...

    @abstractmethod
    def loads(self, data: bytes) -> Any:
        """
        Deserialize bytes produced by dumps().

        Raises:
            Any exception from the underlying codec on malformed input.
        """
        ...


class PickleSerializer(Serializer):
    """Pickle serializer using the highest available protocol."""

    name = "pickle"

    def dumps(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

    def loads(self, data: bytes) -> Any:
        return pickle.loads(data)


class JsonSerializer(Serializer):
    """Compact UTF-8 JSON serializer."""

    name = "json"

    def dumps(self, value: Any) -> bytes:
        return json.dumps(value, separators=(",", ":")).encode("utf-8")

    def loads(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


_SERIALIZERS: dict[str, type[Serializer]] = {
    PickleSerializer.name: PickleSerializer,
    JsonSerializer.name: JsonSerializer,
}


def get_serializer(name: str) -> Serializer:
    """
    Get a serializer instance by name.

    Args:
        name: Serializer name ('pickle' or 'json')

    Returns:
        Serializer instance

    Raises:
        ValueError: If the name is not a known serializer
    """
    serializer_cls = _SERIALIZERS.get(name)
    if serializer_cls is None:
        available = ", ".join(sorted(_SERIALIZERS))
        raise ValueError(f"Unknown serializer '{name}'. Available: {available}")
    return serializer_cls()
