# ==============================================================================
# Cache Store Abstract Base Class
# ==============================================================================
"""
Abstract interface for a key-value cache store with TTL and lock support.

Implementations: DynamoDB (conditional writes). Others would need the same
building blocks: a point read, a conditional put, an atomic conditional
update and a (conditional) delete.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from dynacache.base.lock import Lock


class CacheStore(ABC):
    """
    Generic cache interface for key-value storage with TTL support.

    Keys are plain strings; the store prepends its prefix. Values may be
    numbers (stored natively and usable as counters) or any object the
    configured serializer accepts. A missing or expired entry reads as None.
    """

    @property
    @abstractmethod
    def prefix(self) -> str:
        """The key prefix, including the trailing ':' when non-empty."""
        ...

    @abstractmethod
    def with_prefix(self, prefix: str) -> "CacheStore":
        """
        Return a store sharing this store's backend with a different prefix.

        Args:
            prefix: New prefix without the ':' separator ('' for none)
        """
        ...

    @abstractmethod
    def get(self, key: str, consistent_read: Optional[bool] = None) -> Any:
        """
        Get a cached value.

        Args:
            key: Cache key
            consistent_read: Force a strongly consistent read

        Returns:
            Cached value, or None if not found or expired
        """
        ...

    @abstractmethod
    def get_many(self, keys: Iterable[str]) -> dict[str, Any]:
        """
        Get multiple keys, one request per key.

        Args:
            keys: Cache keys to fetch

        Returns:
            Dict mapping every requested key to its value (None if missing)
        """
        ...

    @abstractmethod
    def put(self, key: str, value: Any, seconds: int) -> bool:
        """
        Store a value for a number of seconds, replacing any existing entry.

        Args:
            key: Cache key
            value: Value to cache
            seconds: Time-to-live; zero or negative stores an already-expired entry

        Returns:
            True
        """
        ...

    @abstractmethod
    def put_many(self, values: dict[str, Any], seconds: int) -> bool:
        """
        Store multiple values, one request per key.

        A failure part-way leaves the earlier keys written.

        Args:
            values: Dict mapping key to value
            seconds: Time-to-live applied to every key

        Returns:
            True
        """
        ...

    @abstractmethod
    def add(self, key: str, value: Any, seconds: int) -> bool:
        """
        Store a value only if the key is missing or expired.

        Args:
            key: Cache key
            value: Value to cache
            seconds: Time-to-live

        Returns:
            True if stored, False if a live entry already exists
        """
        ...

    @abstractmethod
    def increment(self, key: str, amount: int | float = 1) -> int | float | bool:
        """
        Atomically add to a live numeric entry. Does not create the key.

        Args:
            key: Cache key
            amount: Amount to add (default: 1)

        Returns:
            New value, or False if the key is missing or expired
        """
        ...

    @abstractmethod
    def decrement(self, key: str, amount: int | float = 1) -> int | float | bool:
        """
        Atomically subtract from a live numeric entry. Does not create the key.

        Args:
            key: Cache key
            amount: Positive amount to subtract (default: 1)

        Returns:
            New value, or False if the key is missing or expired
        """
        ...

    @abstractmethod
    def forever(self, key: str, value: Any) -> bool:
        """
        Store a value with a far-future expiration.

        Returns:
            True
        """
        ...

    @abstractmethod
    def forget(self, key: str) -> bool:
        """
        Delete a key. Succeeds whether or not the key exists.

        Returns:
            True
        """
        ...

    @abstractmethod
    def flush(self) -> bool:
        """
        Remove every entry.

        Raises:
            UnsupportedOperationError: If the backend cannot clear everything
        """
        ...

    @abstractmethod
    def lock(self, name: str, seconds: int = 0, owner: Optional[str] = None) -> Lock:
        """
        Get a lock handle. Nothing is written until acquire() is called.

        Args:
            name: Lock name (prefixed like cache keys)
            seconds: Lock TTL; 0 means held until released
            owner: Owner token; generated when omitted

        Returns:
            Lock instance
        """
        ...

    @abstractmethod
    def restore_lock(self, name: str, owner: str) -> Lock:
        """
        Rebuild a handle for a lock acquired earlier with a known owner token.

        Args:
            name: Lock name
            owner: Owner token returned by the original handle

        Returns:
            Lock instance bound to that owner
        """
        ...
