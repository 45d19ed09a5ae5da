# ==============================================================================
# Cache Commands
# ==============================================================================
"""
Cache commands for the dynacache CLI.

Commands for reading, writing, counting and deleting cache entries.
"""

from typing import Annotated, Optional

import typer

from dynacache.cli.shared import (
    ValueType,
    get_store,
    parse_value,
    print_failure,
    print_success,
    print_warning,
    to_json,
)
from dynacache.exceptions import UnsupportedOperationError
from dynacache.utils.config import get_settings

ValueTypeOption = Annotated[
    ValueType,
    typer.Option("--type", "-t", help="How to interpret VALUE (str, int, float, json)"),
]


def _ttl_or_default(ttl: Optional[int]) -> int:
    return ttl if ttl is not None else get_settings().cache.default_ttl_seconds


# ==============================================================================
# Commands
# ==============================================================================


def cache_get(
    key: Annotated[str, typer.Argument(help="Cache key")],
    consistent: Annotated[
        bool, typer.Option("--consistent", "-c", help="Use a strongly consistent read")
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Get a cached value."""
    value = get_store().get(key, consistent_read=consistent or None)

    if json_output:
        print(to_json({"key": key, "found": value is not None, "value": value}))
    elif value is None:
        print_warning(f"{key}: not found or expired")
    else:
        print(value)

    if value is None:
        raise typer.Exit(1)


def cache_put(
    key: Annotated[str, typer.Argument(help="Cache key")],
    value: Annotated[str, typer.Argument(help="Value to store")],
    ttl: Annotated[
        Optional[int], typer.Option("--ttl", help="Time-to-live in seconds")
    ] = None,
    value_type: ValueTypeOption = ValueType.STR,
) -> None:
    """Store a value, replacing any existing entry."""
    seconds = _ttl_or_default(ttl)
    get_store().put(key, parse_value(value, value_type), seconds)
    print_success(f"Stored {key} (ttl {seconds}s)")


def cache_add(
    key: Annotated[str, typer.Argument(help="Cache key")],
    value: Annotated[str, typer.Argument(help="Value to store")],
    ttl: Annotated[
        Optional[int], typer.Option("--ttl", help="Time-to-live in seconds")
    ] = None,
    value_type: ValueTypeOption = ValueType.STR,
) -> None:
    """Store a value only if the key is missing or expired."""
    seconds = _ttl_or_default(ttl)
    if get_store().add(key, parse_value(value, value_type), seconds):
        print_success(f"Added {key} (ttl {seconds}s)")
    else:
        print_failure(f"{key} already holds a live value")
        raise typer.Exit(1)


def cache_forever(
    key: Annotated[str, typer.Argument(help="Cache key")],
    value: Annotated[str, typer.Argument(help="Value to store")],
    value_type: ValueTypeOption = ValueType.STR,
) -> None:
    """Store a value with a far-future expiration."""
    get_store().forever(key, parse_value(value, value_type))
    print_success(f"Stored {key} indefinitely")


def cache_increment(
    key: Annotated[str, typer.Argument(help="Cache key")],
    by: Annotated[int, typer.Option("--by", "-b", help="Amount to add")] = 1,
) -> None:
    """Increment a live numeric entry."""
    result = get_store().increment(key, by)
    if result is False:
        print_failure(f"{key}: not found or expired")
        raise typer.Exit(1)
    print(result)


def cache_decrement(
    key: Annotated[str, typer.Argument(help="Cache key")],
    by: Annotated[int, typer.Option("--by", "-b", help="Amount to subtract")] = 1,
) -> None:
    """Decrement a live numeric entry."""
    result = get_store().decrement(key, by)
    if result is False:
        print_failure(f"{key}: not found or expired")
        raise typer.Exit(1)
    print(result)


def cache_forget(
    key: Annotated[str, typer.Argument(help="Cache key")],
) -> None:
    """Delete a cache entry."""
    get_store().forget(key)
    print_success(f"Forgot {key}")


def cache_flush() -> None:
    """Remove every entry (not supported by DynamoDB)."""
    try:
        get_store().flush()
    except UnsupportedOperationError as e:
        print_failure(str(e))
        raise typer.Exit(1)
