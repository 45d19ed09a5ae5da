# ==============================================================================
# dynacache CLI
# ==============================================================================
"""
Command-line interface for the DynamoDB cache store.

Usage:
    dynacache --help
    dynacache put greeting hello --ttl 60
    dynacache put views 10 --type int
    dynacache increment views --by 5
    dynacache get views
    dynacache lock acquire nightly-report --ttl 300
    dynacache lock release nightly-report --owner <token>
    dynacache table create
    dynacache status
"""

from typing import Annotated, Optional

import typer

from dynacache.cli.shared import configure_logging

app = typer.Typer(
    name="dynacache",
    help="DynamoDB cache store and distributed lock CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def _setup(
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help="Override the configured log level")
    ] = None,
) -> None:
    configure_logging(log_level)


# Register cache commands from cli.cache module
from dynacache.cli.cache import (
    cache_add,
    cache_decrement,
    cache_flush,
    cache_forever,
    cache_forget,
    cache_get,
    cache_increment,
    cache_put,
)

app.command("get")(cache_get)
app.command("put")(cache_put)
app.command("add")(cache_add)
app.command("forever")(cache_forever)
app.command("increment")(cache_increment)
app.command("decrement")(cache_decrement)
app.command("forget")(cache_forget)
app.command("flush")(cache_flush)

lock_app = typer.Typer(
    help="Distributed lock operations",
    no_args_is_help=True,
)
app.add_typer(lock_app, name="lock")

from dynacache.cli.lock import lock_acquire, lock_force_release, lock_owner, lock_release

lock_app.command("acquire")(lock_acquire)
lock_app.command("release")(lock_release)
lock_app.command("force-release")(lock_force_release)
lock_app.command("owner")(lock_owner)

table_app = typer.Typer(
    help="Table management",
    no_args_is_help=True,
)
app.add_typer(table_app, name="table")

from dynacache.cli.table import table_create

table_app.command("create")(table_create)

config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

from dynacache.cli.config import config_show

config_app.command("show")(config_show)

# Status command is imported from dynacache.cli.status
from dynacache.cli.status import show_status

app.command("status")(show_status)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
