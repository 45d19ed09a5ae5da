# ==============================================================================
# Infrastructure Adapters
# ==============================================================================
"""
Backend implementations of the dynacache.base contracts.

Available implementations:
- DynamoDBStore / DynamoDBLock: conditional-write cache and lock on DynamoDB
"""

from dynacache.infrastructure.dynamodb import (
    DynamoDBLock,
    DynamoDBStore,
    create_dynamodb_client,
    create_table,
)

__all__ = [
    "DynamoDBLock",
    "DynamoDBStore",
    "create_dynamodb_client",
    "create_table",
]
