# ==============================================================================
# Cache Domain Models
# ==============================================================================
"""
Pydantic models for cache values and stored records.

These models are used for:
- Tagging a value as integer, float or opaque before it is written
- Representing a stored item (cache entry or lock) independent of DynamoDB
- The single expiration predicate shared by every reader

This module is part of the core domain layer and has no external dependencies
beyond Pydantic.
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ValueKind(str, Enum):
    """How a cache value is stored."""

    INTEGER = "integer"
    FLOAT = "float"
    OPAQUE = "opaque"


class CacheValue(BaseModel):
    """
    A cache value tagged with its storage kind.

    INTEGER and FLOAT values are stored as DynamoDB numbers and can be
    incremented in place. OPAQUE values go through the serializer. Strings are
    always OPAQUE, even when they look numeric, so "42" reads back as "42".

    Attributes:
        kind: Storage kind
        payload: The original Python value
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ValueKind = Field(..., description="Storage kind")
    payload: Any = Field(None, description="Original value")

    @classmethod
    def of(cls, value: Any) -> "CacheValue":
        """Tag a Python value. An existing CacheValue is returned unchanged."""
        if isinstance(value, CacheValue):
            return value
        # bool is an int subclass but not a number for caching purposes
        if isinstance(value, bool):
            return cls(kind=ValueKind.OPAQUE, payload=value)
        if isinstance(value, int):
            return cls(kind=ValueKind.INTEGER, payload=value)
        if isinstance(value, float) and math.isfinite(value):
            return cls(kind=ValueKind.FLOAT, payload=value)
        if isinstance(value, Decimal) and value.is_finite():
            return cls(kind=ValueKind.FLOAT, payload=value)
        return cls(kind=ValueKind.OPAQUE, payload=value)

    @classmethod
    def opaque(cls, value: Any) -> "CacheValue":
        """Force a value to be stored through the serializer."""
        return cls(kind=ValueKind.OPAQUE, payload=value)

    @property
    def is_numeric(self) -> bool:
        return self.kind is not ValueKind.OPAQUE

    def number_string(self) -> str:
        """Canonical decimal string for a numeric value."""
        if self.kind is ValueKind.INTEGER:
            return str(int(self.payload))
        if self.kind is ValueKind.FLOAT:
            if isinstance(self.payload, Decimal):
                return str(self.payload)
            return repr(float(self.payload))
        raise ValueError("Opaque values have no numeric representation")


AttributeType = Literal["N", "S", "B"]


class CacheRecord(BaseModel):
    """
    One stored item: a cache entry or a lock.

    For cache entries `value` holds the raw attribute content (a number string
    for N, text for S, bytes for B). For locks it holds the owner token.

    Attributes:
        key: Full (prefixed) key
        value: Raw attribute content, or None if the attribute is missing
        value_type: DynamoDB type of the value attribute
        expires_at: Unix seconds after which the record is logically absent.
            None means the record never expires.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Prefixed key")
    value: str | bytes | None = Field(None, description="Raw value attribute")
    value_type: AttributeType | None = Field(None, description="DynamoDB type of value")
    expires_at: int | None = Field(None, description="Expiration, Unix seconds")

    def is_expired(self, now: int) -> bool:
        """
        Check whether the record is logically deleted at `now`.

        A record without an expiration attribute is never expired.
        """
        return self.expires_at is not None and now >= self.expires_at

    @classmethod
    def from_item(
        cls,
        item: dict[str, dict[str, Any]],
        key_attribute: str,
        value_attribute: str,
        expiration_attribute: str,
    ) -> "CacheRecord":
        """
        Build a record from a low-level DynamoDB item.

        Args:
            item: Item as returned by the boto3 client ({"attr": {"S": "..."}})
            key_attribute: Name of the key attribute
            value_attribute: Name of the value attribute
            expiration_attribute: Name of the expiration attribute
        """
        value = None
        value_type = None
        value_attr = item.get(value_attribute)
        if value_attr:
            value_type, value = next(iter(value_attr.items()))
            if value_type not in ("N", "S", "B"):
                value_type, value = None, None

        expires_at = None
        expiration = item.get(expiration_attribute)
        if expiration and "N" in expiration:
            expires_at = int(Decimal(expiration["N"]))

        return cls(
            key=item[key_attribute]["S"],
            value=value,
            value_type=value_type,
            expires_at=expires_at,
        )
