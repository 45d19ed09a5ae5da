# ==============================================================================
# Table Commands
# ==============================================================================
"""
Table management commands for the dynacache CLI.
"""

import typer

from dynacache.cli.shared import get_store, print_success, print_warning
from dynacache.infrastructure.dynamodb import create_table


def table_create() -> None:
    """Create the cache table (and lock table, if configured separately)."""
    table = get_store().table
    for name in dict.fromkeys([table.table, table.lock_table]):
        if create_table(table.client, name, table.key_attribute):
            print_success(f"Created table {name}")
        else:
            print_warning(f"Table {name} already exists")
