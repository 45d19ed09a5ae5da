# ==============================================================================
# dynacache
# ==============================================================================
"""
Cache store and distributed lock built on DynamoDB conditional writes.

Usage:
    from dynacache import DynamoDBStore, create_dynamodb_client

    store = DynamoDBStore(create_dynamodb_client(), "cache")
    store.put("key", {"a": 1}, 60)
"""

from dynacache.base import CacheStore, Lock
from dynacache.core import CacheRecord, CacheValue, ValueKind
from dynacache.exceptions import (
    CacheDeserializationError,
    CacheError,
    LockNotAcquiredError,
    UnsupportedOperationError,
)
from dynacache.infrastructure.dynamodb import (
    DynamoDBLock,
    DynamoDBStore,
    create_dynamodb_client,
    create_table,
)

__version__ = "0.1.0"

__all__ = [
    "CacheDeserializationError",
    "CacheError",
    "CacheRecord",
    "CacheStore",
    "CacheValue",
    "DynamoDBLock",
    "DynamoDBStore",
    "Lock",
    "LockNotAcquiredError",
    "UnsupportedOperationError",
    "ValueKind",
    "create_dynamodb_client",
    "create_table",
]
