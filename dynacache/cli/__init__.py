# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for dynacache.

Commands are organized into separate modules for maintainability:
- shared.py: Common utilities, value parsing and store construction
- cache.py: get/put/add/forever/increment/decrement/forget/flush
- lock.py: lock acquire/release/force-release/owner
- table.py, status.py, config.py: operational commands
"""

from dynacache.cli.shared import (
    C,
    I,
    Colors,
    Icons,
    ValueType,
    configure_logging,
    get_store,
    parse_value,
)

__all__ = [
    "C",
    "I",
    "Colors",
    "Icons",
    "ValueType",
    "configure_logging",
    "get_store",
    "parse_value",
]
