# ==============================================================================
# DynamoDB Cache Store
# ==============================================================================
"""
DynamoDB implementation of the CacheStore interface.

Provides:
- get/put/forget with emulated TTL (one item per key with an expiration
  timestamp that every reader checks)
- add as a conditional put: only if the key is absent or already expired
- increment/decrement as conditional updates computed by DynamoDB itself
- forever with a far-future expiration
- locks bound to the same client and table layout

DynamoDB's own TTL reaper is not relied on; expired items may still be
physically present and are treated as absent.

Item layout (attribute names configurable):
- key:        S  prefixed key
- value:      N  for numbers, B for serialized values
- expires_at: N  Unix seconds
"""

import copy
import logging
import time
from typing import Any, Iterable, Optional

from dynacache.base import CacheStore
from dynacache.core.codec import decode_number, decode_value, encode_value
from dynacache.core.models import CacheRecord
from dynacache.core.serializers import PickleSerializer, Serializer, get_serializer
from dynacache.core.timestamps import (
    DEFAULT_FOREVER_YEARS,
    Clock,
    current_timestamp,
    forever_timestamp,
    to_timestamp,
)
from dynacache.exceptions import UnsupportedOperationError
from dynacache.infrastructure.dynamodb.client import create_dynamodb_client
from dynacache.infrastructure.dynamodb.lock import DynamoDBLock
from dynacache.infrastructure.dynamodb.table import EXPIRES_AT, KEY, VALUE, DynamoDBTable
from dynacache.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Insert only if absent or expired
ADD_CONDITION = f"attribute_not_exists({KEY}) OR {EXPIRES_AT} < :now"
# Update only a live entry
LIVE_CONDITION = f"attribute_exists({KEY}) AND {EXPIRES_AT} > :now"
INCREMENT_UPDATE = f"SET {VALUE} = {VALUE} + :amount"
DECREMENT_UPDATE = f"SET {VALUE} = {VALUE} - :amount"

FLUSH_UNSUPPORTED = (
    "DynamoDB does not support flushing an entire table. Please create a new table."
)


class DynamoDBStore(CacheStore):
    """
    Cache store on a single DynamoDB table using conditional writes.

    Every guarantee comes from DynamoDB's single-item conditional writes; the
    store holds no in-process locks and can be shared between threads.

    Usage:
        client = create_dynamodb_client()
        store = DynamoDBStore(client, "cache", prefix="app")

        store.put("views", 10, 60)
        store.increment("views", 5)   # 15
        store.add("views", 0, 60)     # False, live entry exists

        lock = store.lock("report", seconds=30)
        if lock.acquire():
            ...
            lock.release()
    """

    def __init__(
        self,
        client: Any,
        table: str,
        key_attribute: str = "key",
        value_attribute: str = "value",
        expiration_attribute: str = "expires_at",
        prefix: str = "",
        lock_table: Optional[str] = None,
        serializer: Optional[Serializer] = None,
        clock: Clock = time.time,
        consistent_read: bool = False,
        forever_years: int = DEFAULT_FOREVER_YEARS,
    ):
        """
        Initialize the store.

        Args:
            client: boto3 DynamoDB client
            table: Cache table name
            key_attribute: Hash key attribute name
            value_attribute: Value attribute name
            expiration_attribute: Expiration timestamp attribute name
            prefix: Key prefix; ':' is appended when non-empty
            lock_table: Table for lock records (default: the cache table)
            serializer: Serializer for non-numeric values (default: pickle)
            clock: Returns current Unix time in seconds
            consistent_read: Default read consistency for get()
            forever_years: Horizon used by forever()
        """
        self._table = DynamoDBTable(
            client=client,
            table=table,
            lock_table=lock_table or table,
            key_attribute=key_attribute,
            value_attribute=value_attribute,
            expiration_attribute=expiration_attribute,
        )
        self._prefix = self._normalize_prefix(prefix)
        self._serializer = serializer or PickleSerializer()
        self._clock = clock
        self._consistent_read = consistent_read
        self._forever_years = forever_years

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        client: Any = None,
        clock: Clock = time.time,
    ) -> "DynamoDBStore":
        """
        Build a store from application settings.

        Args:
            settings: Settings to use. If None, uses get_settings().
            client: DynamoDB client. If None, one is created from settings.
            clock: Returns current Unix time in seconds
        """
        if settings is None:
            settings = get_settings()
        if client is None:
            client = create_dynamodb_client(settings.dynamodb)

        return cls(
            client,
            settings.dynamodb.table,
            key_attribute=settings.dynamodb.key_attribute,
            value_attribute=settings.dynamodb.value_attribute,
            expiration_attribute=settings.dynamodb.expiration_attribute,
            prefix=settings.cache.prefix,
            lock_table=settings.dynamodb.lock_table,
            serializer=get_serializer(settings.cache.serializer),
            clock=clock,
            consistent_read=settings.cache.consistent_read,
            forever_years=settings.cache.forever_years,
        )

    @property
    def table(self) -> DynamoDBTable:
        """The shared table binding (client, tables, attribute names)."""
        return self._table

    @property
    def prefix(self) -> str:
        return self._prefix

    def with_prefix(self, prefix: str) -> "DynamoDBStore":
        store = copy.copy(self)
        store._prefix = self._normalize_prefix(prefix)
        return store

    # ==========================================================================
    # Reads
    # ==========================================================================

    def get(self, key: str, consistent_read: Optional[bool] = None) -> Any:
        if consistent_read is None:
            consistent_read = self._consistent_read

        record = self.get_raw(key, consistent_read)
        if record is None:
            return None
        return decode_value(record, self._serializer)

    def get_raw(self, key: str, consistent_read: bool = False) -> Optional[CacheRecord]:
        """
        Read the live record for a key.

        Args:
            key: Cache key (without prefix)
            consistent_read: Use a strongly consistent read

        Returns:
            The record, or None if missing or expired
        """
        record = self._table.read(self._table.table, self._prefix + key, consistent_read)
        if record is None or record.is_expired(self._now()):
            return None
        return record

    def get_many(self, keys: Iterable[str]) -> dict[str, Any]:
        # TODO: use BatchGetItem (100 keys per request) behind the same contract
        return {key: self.get(key) for key in keys}

    # ==========================================================================
    # Writes
    # ==========================================================================

    def put(self, key: str, value: Any, seconds: int) -> bool:
        now = self._now()
        self._table.write(
            self._table.table,
            self._table.item(
                self._prefix + key,
                encode_value(value, self._serializer),
                to_timestamp(seconds, now),
            ),
        )
        return True

    def put_many(self, values: dict[str, Any], seconds: int) -> bool:
        for key, value in values.items():
            self.put(key, value, seconds)
        return True

    def add(self, key: str, value: Any, seconds: int) -> bool:
        now = self._now()
        added = self._table.conditional_write(
            self._table.table,
            self._table.item(
                self._prefix + key,
                encode_value(value, self._serializer),
                to_timestamp(seconds, now),
            ),
            ADD_CONDITION,
            {":now": {"N": str(now)}},
        )
        if not added:
            logger.debug("add refused for %s: live entry exists", self._prefix + key)
        return added

    def increment(self, key: str, amount: int | float = 1) -> int | float | bool:
        return self._update_number(key, INCREMENT_UPDATE, amount)

    def decrement(self, key: str, amount: int | float = 1) -> int | float | bool:
        return self._update_number(key, DECREMENT_UPDATE, amount)

    def forever(self, key: str, value: Any) -> bool:
        now = self._now()
        return self.put(key, value, forever_timestamp(now, self._forever_years) - now)

    def forget(self, key: str) -> bool:
        return self._table.delete(self._table.table, self._prefix + key)

    def flush(self) -> bool:
        raise UnsupportedOperationError(FLUSH_UNSUPPORTED)

    # ==========================================================================
    # Locks
    # ==========================================================================

    def lock(self, name: str, seconds: int = 0, owner: Optional[str] = None) -> DynamoDBLock:
        return DynamoDBLock(self._table, self._prefix + name, seconds, owner, clock=self._clock)

    def restore_lock(self, name: str, owner: str) -> DynamoDBLock:
        return self.lock(name, 0, owner)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _update_number(self, key: str, update: str, amount: int | float) -> int | float | bool:
        attributes = self._table.conditional_update(
            self._table.table,
            self._prefix + key,
            update,
            LIVE_CONDITION,
            {
                ":now": {"N": str(self._now())},
                ":amount": {"N": str(amount)},
            },
        )
        if attributes is None:
            logger.debug("Counter %s is missing or expired", self._prefix + key)
            return False
        return decode_number(attributes[self._table.value_attribute]["N"])

    def _now(self) -> int:
        return current_timestamp(self._clock)

    @staticmethod
    def _normalize_prefix(prefix: str) -> str:
        return f"{prefix}:" if prefix else ""
