# ==============================================================================
# DynamoDB Table Binding
# ==============================================================================
"""
Shared, read-only binding of a DynamoDB client to a cache table layout.

A store creates one DynamoDBTable and hands the same instance to every lock
it creates. All conditional-write plumbing lives here so that cache entries
and locks use exactly the same request shapes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from botocore.exceptions import ClientError

from dynacache.core.models import CacheRecord
from dynacache.infrastructure.dynamodb.client import is_condition_failed

logger = logging.getLogger(__name__)

# Placeholders used in every expression
KEY = "#key"
VALUE = "#value"
EXPIRES_AT = "#expires_at"


@dataclass(frozen=True)
class DynamoDBTable:
    """
    Client, table names and attribute names shared by a store and its locks.

    Attributes:
        client: boto3 DynamoDB client
        table: Cache table name
        lock_table: Table holding lock records (same schema)
        key_attribute: Hash key attribute name
        value_attribute: Value attribute name
        expiration_attribute: Expiration timestamp attribute name
    """

    client: Any
    table: str
    lock_table: str
    key_attribute: str = "key"
    value_attribute: str = "value"
    expiration_attribute: str = "expires_at"

    @property
    def attribute_names(self) -> dict[str, str]:
        """ExpressionAttributeNames for the three placeholders."""
        return {
            KEY: self.key_attribute,
            VALUE: self.value_attribute,
            EXPIRES_AT: self.expiration_attribute,
        }

    def key(self, full_key: str) -> dict[str, dict[str, str]]:
        """Primary key for a prefixed key."""
        return {self.key_attribute: {"S": full_key}}

    def item(
        self,
        full_key: str,
        value: dict[str, Any],
        expires_at: Optional[int],
    ) -> dict[str, dict[str, Any]]:
        """
        Build a full item.

        Args:
            full_key: Prefixed key
            value: Attribute value for the value attribute
            expires_at: Expiration timestamp, or None to omit the attribute
        """
        item = {
            self.key_attribute: {"S": full_key},
            self.value_attribute: value,
        }
        if expires_at is not None:
            item[self.expiration_attribute] = {"N": str(expires_at)}
        return item

    def read(self, table: str, full_key: str, consistent_read: bool) -> Optional[CacheRecord]:
        """
        Point read of one item.

        Returns:
            The record, or None if no item exists (expiry is not checked here)
        """
        response = self.client.get_item(
            TableName=table,
            Key=self.key(full_key),
            ConsistentRead=consistent_read,
        )
        item = response.get("Item")
        if not item:
            return None
        return CacheRecord.from_item(
            item,
            self.key_attribute,
            self.value_attribute,
            self.expiration_attribute,
        )

    def write(self, table: str, item: dict[str, dict[str, Any]]) -> None:
        """Unconditional put (last write wins)."""
        self.client.put_item(TableName=table, Item=item)

    def conditional_write(
        self,
        table: str,
        item: dict[str, dict[str, Any]],
        condition: str,
        values: dict[str, dict[str, Any]],
    ) -> bool:
        """
        Put an item if the condition holds.

        Returns:
            True if written, False if the condition failed

        Raises:
            ClientError: For any failure other than the condition check
        """
        try:
            self.client.put_item(
                TableName=table,
                Item=item,
                ConditionExpression=condition,
                ExpressionAttributeNames=self._names_for(condition),
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if is_condition_failed(e):
                return False
            raise
        return True

    def conditional_update(
        self,
        table: str,
        full_key: str,
        update: str,
        condition: str,
        values: dict[str, dict[str, Any]],
    ) -> Optional[dict[str, dict[str, Any]]]:
        """
        Apply an update expression if the condition holds.

        Returns:
            The updated attributes (UPDATED_NEW), or None if the condition failed

        Raises:
            ClientError: For any failure other than the condition check
        """
        try:
            response = self.client.update_item(
                TableName=table,
                Key=self.key(full_key),
                UpdateExpression=update,
                ConditionExpression=condition,
                ExpressionAttributeNames=self._names_for(update + " " + condition),
                ExpressionAttributeValues=values,
                ReturnValues="UPDATED_NEW",
            )
        except ClientError as e:
            if is_condition_failed(e):
                return None
            raise
        return response.get("Attributes", {})

    def delete(
        self,
        table: str,
        full_key: str,
        condition: Optional[str] = None,
        values: Optional[dict[str, dict[str, Any]]] = None,
    ) -> bool:
        """
        Delete an item, optionally only if a condition holds.

        Deleting a missing item without a condition succeeds.

        Returns:
            True if deleted (or no condition given), False if the condition failed
        """
        kwargs: dict[str, Any] = {"TableName": table, "Key": self.key(full_key)}
        if condition:
            kwargs["ConditionExpression"] = condition
            kwargs["ExpressionAttributeNames"] = self._names_for(condition)
            if values:
                kwargs["ExpressionAttributeValues"] = values
        try:
            self.client.delete_item(**kwargs)
        except ClientError as e:
            if condition and is_condition_failed(e):
                return False
            raise
        return True

    def _names_for(self, expression: str) -> dict[str, str]:
        # DynamoDB rejects unused ExpressionAttributeNames
        return {
            placeholder: name
            for placeholder, name in self.attribute_names.items()
            if placeholder in expression
        }
