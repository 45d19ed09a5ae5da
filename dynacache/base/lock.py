# ==============================================================================
# Lock Abstract Base Class
# ==============================================================================
"""
Abstract interface for a distributed lock.

A lock is identified by a name and guarded by an owner token. Only the handle
holding the matching token may release it; force_release() ignores the token.
acquire() makes a single attempt and never waits.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, TypeVar

from dynacache.exceptions import LockNotAcquiredError

T = TypeVar("T")


class Lock(ABC):
    """
    Distributed lock with owner-token based release.

    Subclasses implement the backend operations; get() and the context
    manager protocol are built on top of them.
    """

    def __init__(self, name: str, seconds: int, owner: str):
        self.name = name
        self.seconds = seconds
        self._owner = owner

    @property
    def owner(self) -> str:
        """The owner token identifying this handle."""
        return self._owner

    @abstractmethod
    def acquire(self) -> bool:
        """
        Attempt to acquire the lock once.

        Returns:
            True if acquired, False if another owner holds a live lock
        """
        ...

    @abstractmethod
    def release(self) -> bool:
        """
        Release the lock if this handle's owner holds it.

        Returns:
            True if released, False if the lock is held by someone else or absent
        """
        ...

    @abstractmethod
    def force_release(self) -> bool:
        """
        Release the lock regardless of owner.

        Returns:
            True
        """
        ...

    @abstractmethod
    def get_current_owner(self) -> Optional[str]:
        """
        Get the owner token of the live lock.

        Returns:
            Owner token, or None if the lock is free or expired
        """
        ...

    def is_owned_by_current_process(self) -> bool:
        """Check whether the live lock belongs to this handle."""
        return self.get_current_owner() == self._owner

    def get(self, callback: Optional[Callable[[], T]] = None) -> T | bool:
        """
        Acquire the lock and optionally run a callback while holding it.

        The lock is released after the callback returns or raises.

        Args:
            callback: Function to run while the lock is held

        Returns:
            The callback result, or the acquire() result when no callback is
            given. False if the lock was not acquired.
        """
        acquired = self.acquire()
        if acquired and callback is not None:
            try:
                return callback()
            finally:
                self.release()
        return acquired

    def __enter__(self) -> "Lock":
        if not self.acquire():
            raise LockNotAcquiredError(self.name, self.get_current_owner())
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()
