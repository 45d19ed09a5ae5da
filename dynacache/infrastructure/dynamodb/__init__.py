# ==============================================================================
# DynamoDB Infrastructure
# ==============================================================================
"""
DynamoDB adapter: cache store, lock, table binding and client helpers.
"""

from dynacache.infrastructure.dynamodb.client import (
    create_dynamodb_client,
    create_table,
    describe_table,
    is_condition_failed,
)
from dynacache.infrastructure.dynamodb.lock import DynamoDBLock
from dynacache.infrastructure.dynamodb.store import DynamoDBStore
from dynacache.infrastructure.dynamodb.table import DynamoDBTable

__all__ = [
    "DynamoDBLock",
    "DynamoDBStore",
    "DynamoDBTable",
    "create_dynamodb_client",
    "create_table",
    "describe_table",
    "is_condition_failed",
]
