# ==============================================================================
# dynacache Utilities
# ==============================================================================
"""
Shared utilities: configuration and retry policies.
"""

from dynacache.utils.config import (
    CacheSettings,
    DynamoDBSettings,
    Settings,
    get_settings,
)

__all__ = [
    "CacheSettings",
    "DynamoDBSettings",
    "Settings",
    "get_settings",
]
