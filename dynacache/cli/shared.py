# ==============================================================================
# Shared Utilities for CLI Commands
# ==============================================================================
"""
Shared utilities, constants, and helper functions used across CLI command modules.

This module provides:
- ANSI color codes and status icons
- Logging setup
- Store construction from settings
- Parsing of command-line values into tagged cache values
"""

import json
import logging
from enum import Enum
from functools import lru_cache
from typing import Any

import typer

from dynacache.core.models import CacheValue
from dynacache.infrastructure.dynamodb import DynamoDBStore
from dynacache.utils.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that are too chatty at INFO
QUIET_LOGGERS = ("boto3", "botocore", "urllib3")


# ==============================================================================
# ANSI Colors and Icons
# ==============================================================================


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


class Icons:
    """Status icons using Unicode symbols."""

    CHECK = "✓"
    CROSS = "✗"
    WARN = "!"
    LOCK = "◆"


# Module-level aliases for convenience
C, I = Colors, Icons


def print_success(message: str) -> None:
    print(f"  {C.GREEN}{I.CHECK}{C.RESET} {message}")


def print_failure(message: str) -> None:
    print(f"  {C.RED}{I.CROSS}{C.RESET} {message}")


def print_warning(message: str) -> None:
    print(f"  {C.YELLOW}{I.WARN}{C.RESET} {message}")


# ==============================================================================
# Setup Helpers
# ==============================================================================


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for CLI use."""
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@lru_cache
def get_store() -> DynamoDBStore:
    """Get a DynamoDBStore configured from settings (cached per process)."""
    return DynamoDBStore.from_settings(get_settings())


# ==============================================================================
# Value Parsing
# ==============================================================================


class ValueType(str, Enum):
    """How a command-line VALUE argument is interpreted."""

    STR = "str"
    INT = "int"
    FLOAT = "float"
    JSON = "json"


def parse_value(raw: str, value_type: ValueType) -> CacheValue:
    """
    Turn a command-line string into a tagged cache value.

    Strings stay strings unless a numeric type is requested explicitly.

    Raises:
        typer.BadParameter: If the string does not parse as the requested type
    """
    try:
        if value_type is ValueType.INT:
            return CacheValue.of(int(raw))
        if value_type is ValueType.FLOAT:
            return CacheValue.of(float(raw))
        if value_type is ValueType.JSON:
            return CacheValue.of(json.loads(raw))
    except ValueError as e:
        raise typer.BadParameter(f"Cannot parse {raw!r} as {value_type.value}: {e}") from e
    return CacheValue.opaque(raw)


def to_json(data: Any) -> str:
    """Dump data as indented JSON, falling back to repr() for other objects."""
    return json.dumps(data, indent=2, default=repr)
