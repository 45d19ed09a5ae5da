# ==============================================================================
# Cache Exceptions
# ==============================================================================
"""
Exceptions raised by the cache store and lock.

Condition failures (a live key refusing `add`, a missing key refusing
`increment`, a contended lock) are NOT exceptions: they are returned as
False. Backend errors from botocore are never wrapped and propagate as-is.
"""


class CacheError(Exception):
    """Base class for dynacache errors."""


class UnsupportedOperationError(CacheError, NotImplementedError):
    """The backend cannot perform the requested operation."""


class CacheDeserializationError(CacheError):
    """A stored value could not be decoded by the configured serializer."""

    def __init__(self, key: str, message: str = "Failed to deserialize cached value"):
        self.key = key
        super().__init__(f"{message} for key {key!r}")


class LockNotAcquiredError(CacheError):
    """Raised when a lock used as a context manager is held by another owner."""

    def __init__(self, name: str, owner: str | None = None):
        self.name = name
        self.owner = owner
        super().__init__(f"Lock {name!r} is held by another owner")
