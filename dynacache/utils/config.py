# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv.
"""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()


class DynamoDBSettings(BaseSettings):
    """DynamoDB connection and table layout settings."""

    model_config = SettingsConfigDict(env_prefix="DYNAMODB_")

    table: str = Field(default="cache", description="Cache table name")
    lock_table: Optional[str] = Field(
        default=None, description="Dedicated lock table (defaults to the cache table)"
    )
    region_name: str = Field(default="us-east-1", description="AWS region")
    endpoint_url: Optional[str] = Field(
        default=None, description="Endpoint override for local DynamoDB or LocalStack"
    )
    aws_access_key_id: Optional[str] = Field(
        default=None, description="AWS access key (uses env/role if not provided)"
    )
    aws_secret_access_key: Optional[str] = Field(default=None, description="AWS secret key")

    # Attribute names (all items share this schema)
    key_attribute: str = Field(default="key", description="Hash key attribute name")
    value_attribute: str = Field(default="value", description="Value attribute name")
    expiration_attribute: str = Field(
        default="expires_at", description="Expiration timestamp attribute name"
    )

    # botocore client behaviour
    connect_timeout: int = Field(default=5, description="Connect timeout in seconds")
    read_timeout: int = Field(default=10, description="Read timeout in seconds")
    max_attempts: int = Field(default=3, description="botocore transport retry attempts")
    retry_mode: Literal["legacy", "standard", "adaptive"] = Field(
        default="standard", description="botocore retry mode"
    )


class CacheSettings(BaseSettings):
    """Cache behaviour settings."""

    model_config = SettingsConfigDict(env_prefix="CACHE_")

    prefix: str = Field(default="", description="Key prefix (':' is appended)")
    default_ttl_seconds: int = Field(default=3600, description="TTL used by the CLI")
    lock_ttl_seconds: int = Field(
        default=0, description="Default lock TTL used by the CLI (0 = until released)"
    )
    forever_years: int = Field(default=5, description="Horizon for forever() entries")
    consistent_read: bool = Field(
        default=False, description="Use strongly consistent reads for get()"
    )
    serializer: Literal["pickle", "json"] = Field(
        default="pickle", description="Serializer for non-numeric values"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    dynamodb: DynamoDBSettings = Field(default_factory=DynamoDBSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    # General settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
