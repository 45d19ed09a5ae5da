# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the dynacache CLI.
"""

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from dynacache.cli.shared import to_json
from dynacache.utils.config import get_settings

SECRET_FIELDS = {"aws_secret_access_key"}


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display current configuration (secrets are masked)."""
    settings = get_settings()
    config = settings.model_dump()
    for field in SECRET_FIELDS:
        if config["dynamodb"].get(field):
            config["dynamodb"][field] = "********"

    if json_output:
        print(to_json(config))
        return

    table = Table(title="dynacache configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for group in ("dynamodb", "cache"):
        for name, value in config[group].items():
            table.add_row(f"{group}.{name}", "" if value is None else str(value))
    table.add_row("log_level", settings.log_level)
    Console().print(table)
