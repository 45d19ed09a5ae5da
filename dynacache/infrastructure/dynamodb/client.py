# ==============================================================================
# DynamoDB Client Helpers
# ==============================================================================
"""
Construction of the boto3 DynamoDB client and table bootstrap helpers.

The client carries the network-level concerns (timeouts, transport retries).
The cache store itself adds no retry logic on top of it.
"""

import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from dynacache.utils.config import DynamoDBSettings, get_settings

logger = logging.getLogger(__name__)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def is_condition_failed(error: ClientError) -> bool:
    """Check whether a ClientError is a failed ConditionExpression."""
    return error.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED


def create_dynamodb_client(settings: Optional[DynamoDBSettings] = None) -> Any:
    """
    Create a low-level DynamoDB client.

    Configured with:
    - Short connect/read timeouts for fast failure detection
    - botocore transport retries (retry mode and attempts from settings)

    Args:
        settings: DynamoDB settings. If None, uses application settings.

    Returns:
        boto3 DynamoDB client
    """
    if settings is None:
        settings = get_settings().dynamodb

    config = Config(
        retries={"max_attempts": settings.max_attempts, "mode": settings.retry_mode},
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
    )

    session_kwargs = {}
    if settings.aws_access_key_id and settings.aws_secret_access_key:
        session_kwargs["aws_access_key_id"] = settings.aws_access_key_id
        session_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key

    session = boto3.Session(**session_kwargs)

    client_kwargs: dict[str, Any] = {
        "region_name": settings.region_name,
        "config": config,
    }
    if settings.endpoint_url:
        client_kwargs["endpoint_url"] = settings.endpoint_url

    return session.client("dynamodb", **client_kwargs)


def create_table(client: Any, table_name: str, key_attribute: str = "key") -> bool:
    """
    Create a cache table with a single string hash key.

    Uses on-demand billing. Waits until the table exists.

    Args:
        client: boto3 DynamoDB client
        table_name: Table to create
        key_attribute: Name of the hash key attribute

    Returns:
        True if the table was created, False if it already existed
    """
    try:
        client.create_table(
            TableName=table_name,
            AttributeDefinitions=[{"AttributeName": key_attribute, "AttributeType": "S"}],
            KeySchema=[{"AttributeName": key_attribute, "KeyType": "HASH"}],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "ResourceInUseException":
            logger.info("Table %s already exists", table_name)
            return False
        raise

    client.get_waiter("table_exists").wait(TableName=table_name)
    logger.info("Created table %s (hash key: %s)", table_name, key_attribute)
    return True


def describe_table(client: Any, table_name: str) -> dict:
    """
    Describe a table.

    Args:
        client: boto3 DynamoDB client
        table_name: Table to describe

    Returns:
        Dict with name, status, item_count and key_attribute
    """
    table = client.describe_table(TableName=table_name)["Table"]
    hash_key = next(
        (k["AttributeName"] for k in table.get("KeySchema", []) if k["KeyType"] == "HASH"),
        None,
    )
    return {
        "name": table["TableName"],
        "status": table.get("TableStatus"),
        "item_count": table.get("ItemCount"),
        "key_attribute": hash_key,
    }
