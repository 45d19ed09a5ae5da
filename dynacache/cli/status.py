# ==============================================================================
# Status Command
# ==============================================================================
"""
Status command for the dynacache CLI.

Describes the configured tables in either formatted or JSON output.

Includes light retry logic (3 attempts, ~7 seconds) for network resilience
when describing tables.
"""

import logging
from typing import Annotated, Any

import typer
from botocore.exceptions import BotoCoreError, ClientError

from dynacache.cli.shared import C, I, get_store, to_json
from dynacache.infrastructure.dynamodb import describe_table
from dynacache.utils.retry import DYNAMODB_RETRY_EXCEPTIONS, retry_light

logger = logging.getLogger(__name__)


@retry_light(DYNAMODB_RETRY_EXCEPTIONS, logger)
def _describe_with_retry(client: Any, table_name: str) -> dict:
    return describe_table(client, table_name)


def _collect_table_status(client: Any, table_name: str) -> dict[str, Any]:
    """Describe a table, reporting errors instead of raising."""
    try:
        info = _describe_with_retry(client, table_name)
        info["reachable"] = True
        return info
    except (ClientError, BotoCoreError) as e:
        return {"name": table_name, "reachable": False, "error": str(e)}


def show_status(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show cache and lock table status."""
    store = get_store()
    table = store.table

    tables = [
        _collect_table_status(table.client, name)
        for name in dict.fromkeys([table.table, table.lock_table])
    ]
    data = {
        "prefix": store.prefix,
        "attributes": {
            "key": table.key_attribute,
            "value": table.value_attribute,
            "expiration": table.expiration_attribute,
        },
        "tables": tables,
    }

    if json_output:
        print(to_json(data))
    else:
        print(f"\n  {C.BOLD}dynacache status{C.RESET}\n")
        for info in tables:
            if info["reachable"]:
                print(
                    f"  {C.GREEN}{I.CHECK}{C.RESET} {info['name']}: {info['status']}"
                    f" {C.DIM}(items ~{info['item_count']}, key {info['key_attribute']}){C.RESET}"
                )
            else:
                print(f"  {C.RED}{I.CROSS}{C.RESET} {info['name']}: {info['error']}")
        print(f"\n  {C.DIM}Prefix: {store.prefix or '(none)'}{C.RESET}\n")

    if not all(info["reachable"] for info in tables):
        raise typer.Exit(1)
