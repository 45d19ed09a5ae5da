# ==============================================================================
# Lock Commands
# ==============================================================================
"""
Lock commands for the dynacache CLI.

`lock acquire` prints the owner token. Pass it back with `--owner` to release
the lock from a later invocation.
"""

from typing import Annotated, Optional

import typer

from dynacache.cli.shared import get_store, print_failure, print_success, print_warning
from dynacache.utils.config import get_settings


def lock_acquire(
    name: Annotated[str, typer.Argument(help="Lock name")],
    ttl: Annotated[
        Optional[int],
        typer.Option("--ttl", help="Lock TTL in seconds (0 = until released)"),
    ] = None,
    owner: Annotated[
        Optional[str], typer.Option("--owner", "-o", help="Owner token (default: random)")
    ] = None,
) -> None:
    """Try once to acquire a lock and print its owner token."""
    seconds = ttl if ttl is not None else get_settings().cache.lock_ttl_seconds
    lock = get_store().lock(name, seconds, owner)
    if not lock.acquire():
        print_failure(f"Lock {name} is held by another owner")
        raise typer.Exit(1)
    print(lock.owner)


def lock_release(
    name: Annotated[str, typer.Argument(help="Lock name")],
    owner: Annotated[str, typer.Option("--owner", "-o", help="Owner token from acquire")],
) -> None:
    """Release a lock held by the given owner."""
    if get_store().restore_lock(name, owner).release():
        print_success(f"Released lock {name}")
    else:
        print_failure(f"Lock {name} is not held by {owner}")
        raise typer.Exit(1)


def lock_force_release(
    name: Annotated[str, typer.Argument(help="Lock name")],
) -> None:
    """Release a lock regardless of owner."""
    get_store().lock(name).force_release()
    print_success(f"Force released lock {name}")


def lock_owner(
    name: Annotated[str, typer.Argument(help="Lock name")],
) -> None:
    """Show the owner token of a live lock."""
    current = get_store().lock(name).get_current_owner()
    if current is None:
        print_warning(f"Lock {name} is free")
        raise typer.Exit(1)
    print(current)
