# ==============================================================================
# Core Domain Logic
# ==============================================================================
"""
Pure domain logic with no backend dependencies.

This module contains:
- Domain models (CacheValue, CacheRecord, ValueKind)
- Value encoding/decoding and serializers
- Expiration timestamp helpers

All code here is backend-agnostic and easily unit-testable.
"""

from dynacache.core.codec import decode_number, decode_value, encode_value
from dynacache.core.models import CacheRecord, CacheValue, ValueKind
from dynacache.core.serializers import (
    JsonSerializer,
    PickleSerializer,
    Serializer,
    get_serializer,
)
from dynacache.core.timestamps import (
    Clock,
    current_timestamp,
    forever_timestamp,
    to_timestamp,
)

__all__ = [
    "CacheRecord",
    "CacheValue",
    "Clock",
    "JsonSerializer",
    "PickleSerializer",
    "Serializer",
    "ValueKind",
    "current_timestamp",
    "decode_number",
    "decode_value",
    "encode_value",
    "forever_timestamp",
    "get_serializer",
    "to_timestamp",
]
