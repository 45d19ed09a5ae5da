# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Abstract base classes defining the contracts for the ports-and-adapters architecture.

Backend adapters under dynacache.infrastructure implement these.
"""

from dynacache.base.cache import CacheStore
from dynacache.base.lock import Lock

__all__ = [
    "CacheStore",
    "Lock",
]
