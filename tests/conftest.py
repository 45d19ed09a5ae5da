# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- moto-backed DynamoDB client with the cache table created (no AWS needed)
- A controllable clock for simulating expiry
- DynamoDBStore instances wired to both
"""

import boto3
import pytest
from moto import mock_aws

from dynacache.infrastructure.dynamodb import DynamoDBStore, create_table
from dynacache.utils.config import get_settings

TABLE = "cache"
REGION = "us-east-1"
START_TIME = 1_700_000_000


class FakeClock:
    """Callable clock returning a fixed Unix time until advanced."""

    def __init__(self, start: float = START_TIME):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never looks for real ones."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture()
def dynamodb_client(aws_credentials):
    """A moto DynamoDB client with an empty cache table."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name=REGION)
        create_table(client, TABLE)
        yield client


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(dynamodb_client, clock):
    """A DynamoDBStore without a prefix, driven by the fake clock."""
    return DynamoDBStore(dynamodb_client, TABLE, clock=clock)


@pytest.fixture()
def raw_item(dynamodb_client):
    """Fetch the physical item for a full key, bypassing expiry checks."""

    def _raw_item(full_key: str, table: str = TABLE) -> dict | None:
        response = dynamodb_client.get_item(
            TableName=table, Key={"key": {"S": full_key}}, ConsistentRead=True
        )
        return response.get("Item")

    return _raw_item


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
