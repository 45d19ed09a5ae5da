# ==============================================================================
# Value Codec
# ==============================================================================
"""
Encoding of tagged cache values into DynamoDB attribute values and back.

- INTEGER/FLOAT -> {"N": "<decimal string>"}
- OPAQUE        -> {"B": serializer.dumps(value)}

Reading accepts N, S and B so that items written by other clients still
decode: numeric text becomes int or float, anything else goes through the
serializer.
"""

import re
from typing import Any

from dynacache.core.models import CacheRecord, CacheValue
from dynacache.core.serializers import Serializer
from dynacache.exceptions import CacheDeserializationError

_INTEGER_RE = re.compile(r"[-+]?\d+")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def is_integer_string(text: str) -> bool:
    return _INTEGER_RE.fullmatch(text.strip()) is not None


def is_numeric_string(text: str) -> bool:
    return _NUMBER_RE.fullmatch(text.strip()) is not None


def decode_number(text: str) -> int | float:
    """Decode a number string: int when it is an integer literal, else float."""
    if is_integer_string(text):
        return int(text)
    return float(text)


def encode_value(value: Any, serializer: Serializer) -> dict[str, Any]:
    """
    Encode a value as a DynamoDB attribute value.

    Args:
        value: Python value or CacheValue
        serializer: Serializer for opaque values

    Returns:
        Attribute value dict, e.g. {"N": "42"} or {"B": b"..."}
    """
    tagged = CacheValue.of(value)
    if tagged.is_numeric:
        return {"N": tagged.number_string()}
    return {"B": serializer.dumps(tagged.payload)}


def decode_value(record: CacheRecord, serializer: Serializer) -> Any:
    """
    Decode the value of a stored record.

    Raises:
        CacheDeserializationError: If an opaque value cannot be deserialized
    """
    if record.value is None:
        return None

    if record.value_type == "N":
        return decode_number(str(record.value))

    if record.value_type == "S":
        text = str(record.value)
        if is_numeric_string(text):
            return decode_number(text)
        data = text.encode("utf-8")
    else:
        data = bytes(record.value)

    try:
        return serializer.loads(data)
    except Exception as e:
        raise CacheDeserializationError(record.key) from e
