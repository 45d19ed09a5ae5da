# ==============================================================================
# DynamoDB Lock
# ==============================================================================
"""
Distributed lock stored as an item in the cache (or a dedicated lock) table.

Lock item layout (same schema as cache entries):
- key:        S  prefixed lock name
- value:      S  owner token
- expires_at: N  Unix seconds; omitted for locks held until released

Acquire uses the same condition as CacheStore.add (absent or expired), so a
lock whose holder crashed becomes available once its TTL passes. A lock with
no expiration attribute can only be taken after it is released. Release is a
delete conditioned on the stored owner token.
"""

import logging
import time
import uuid
from typing import Optional

from dynacache.base import Lock
from dynacache.core.timestamps import Clock, current_timestamp
from dynacache.infrastructure.dynamodb.table import EXPIRES_AT, KEY, VALUE, DynamoDBTable

logger = logging.getLogger(__name__)

ACQUIRE_CONDITION = f"attribute_not_exists({KEY}) OR {EXPIRES_AT} < :now"
RELEASE_CONDITION = f"attribute_exists({KEY}) AND {VALUE} = :owner"


class DynamoDBLock(Lock):
    """
    Lock handle borrowing a store's table binding.

    The handle owns its name, TTL and owner token. Keep the owner token (see
    `owner`) to release the lock from another process via restore_lock().
    """

    def __init__(
        self,
        table: DynamoDBTable,
        name: str,
        seconds: int = 0,
        owner: Optional[str] = None,
        clock: Clock = time.time,
    ):
        """
        Initialize a lock handle. Nothing is written until acquire().

        Args:
            table: Table binding shared with the store
            name: Full (already prefixed) lock name
            seconds: Lock TTL; 0 means held until released
            owner: Owner token (default: random UUID hex)
            clock: Returns current Unix time in seconds
        """
        super().__init__(name, seconds, owner or uuid.uuid4().hex)
        self._table = table
        self._clock = clock

    def acquire(self) -> bool:
        now = current_timestamp(self._clock)
        expires_at = now + self.seconds if self.seconds > 0 else None

        acquired = self._table.conditional_write(
            self._table.lock_table,
            self._table.item(self.name, {"S": self.owner}, expires_at),
            ACQUIRE_CONDITION,
            {":now": {"N": str(now)}},
        )
        if acquired:
            logger.info("Acquired lock %s (owner %s, ttl %ss)", self.name, self.owner, self.seconds)
        else:
            logger.debug("Lock %s is held by another owner", self.name)
        return acquired

    def release(self) -> bool:
        released = self._table.delete(
            self._table.lock_table,
            self.name,
            RELEASE_CONDITION,
            {":owner": {"S": self.owner}},
        )
        if released:
            logger.info("Released lock %s (owner %s)", self.name, self.owner)
        else:
            logger.debug("Lock %s is not held by owner %s", self.name, self.owner)
        return released

    def force_release(self) -> bool:
        self._table.delete(self._table.lock_table, self.name)
        logger.info("Force released lock %s", self.name)
        return True

    def get_current_owner(self) -> Optional[str]:
        record = self._table.read(self._table.lock_table, self.name, consistent_read=True)
        if record is None or record.is_expired(current_timestamp(self._clock)):
            return None
        if record.value_type != "S":
            return None
        return str(record.value)

    def __repr__(self) -> str:
        return f"DynamoDBLock(name={self.name!r}, seconds={self.seconds}, owner={self.owner!r})"
