"""
DynamoDB-backed record store with read-time item expiry.

Items may carry an epoch-seconds expiry attribute. DynamoDB's own TTL sweep
is asynchronous and can lag for hours, so ``get`` checks the timestamp itself
and treats an expired item as missing.
"""

from typing import Any, Callable, Mapping, Optional

import aioboto3

from aws_utils.config import get_settings
from aws_utils.shared import timestamp
from aws_utils.shared.exceptions import BOTO_ERRORS, ItemNotFoundError, RemoteServiceError
from aws_utils.shared.logging import get_logger
from aws_utils.shared.session import build_session, table_scope

logger = get_logger(__name__)


class RecordStore:
    """Get/put/delete items in a single DynamoDB table."""

    def __init__(
        self,
        table_name: str,
        region: Optional[str] = None,
        *,
        table: Any = None,
        session: Optional[aioboto3.Session] = None,
        endpoint_url: Optional[str] = None,
        expiry_attribute: Optional[str] = None,
        clock: Callable[[], int] = timestamp.in_seconds,
    ):
        """
        Initialize the store.

        Args:
            table_name: DynamoDB table name.
            region: AWS region; defaults to the configured region.
            table: Optional Table-like object for dependency injection.
            session: Optional aioboto3 session to open tables from.
            endpoint_url: Optional endpoint override.
            expiry_attribute: Item attribute holding the expiry timestamp.
            clock: Returns the current time in epoch seconds.
        """
        settings = get_settings()
        self.table_name = table_name
        self.region = region or settings.region
        self.endpoint_url = endpoint_url or settings.endpoint_url
        self.expiry_attribute = expiry_attribute or settings.expiry_attribute
        self._table = table
        self._session = session
        self._clock = clock

    def _get_session(self) -> aioboto3.Session:
        if self._session is None:
            self._session = build_session(self.region)
        return self._session

    def _table_scope(self):
        return table_scope(
            self._get_session,
            self.table_name,
            injected=self._table,
            endpoint_url=self.endpoint_url,
        )

    async def put(self, item: Mapping[str, Any]) -> dict[str, Any]:
        """Write ``item`` verbatim and return the raw PutItem response."""
        logger.debug("Putting item", extra={"table": self.table_name})
        try:
            async with self._table_scope() as table:
                return await table.put_item(Item=item)
        except BOTO_ERRORS as e:
            logger.error(
                "Failed to put item",
                extra={"table": self.table_name, "error": str(e)},
            )
            raise RemoteServiceError.from_boto(
                e, operation="PutItem", details={"table": self.table_name}
            ) from e

    async def get(self, key: Mapping[str, Any]) -> dict[str, Any]:
        """
        Fetch the live item stored at ``key``.

        Raises:
            ItemNotFoundError: No item exists, or its expiry is in the past.
            RemoteServiceError: The GetItem call itself failed.
        """
        try:
            async with self._table_scope() as table:
                response = await table.get_item(Key=key)
        except BOTO_ERRORS as e:
            logger.error(
                "Failed to get item",
                extra={"table": self.table_name, "key": dict(key), "error": str(e)},
            )
            raise RemoteServiceError.from_boto(
                e, operation="GetItem", details={"table": self.table_name}
            ) from e

        item = response.get("Item")
        if not item:
            logger.debug(
                "No item found",
                extra={"table": self.table_name, "key": dict(key)},
            )
            raise ItemNotFoundError(details={"table": self.table_name, "key": dict(key)})

        expires_at = item.get(self.expiry_attribute)
        now = self._clock()
        if expires_at is not None and expires_at < now:
            logger.info(
                "Item expired",
                extra={
                    "table": self.table_name,
                    "key": dict(key),
                    "expires_at": expires_at,
                    "now": now,
                },
            )
            raise ItemNotFoundError(
                details={"table": self.table_name, "key": dict(key), "expired": True}
            )

        return item

    async def delete(self, key: Mapping[str, Any]) -> dict[str, Any]:
        """Delete the item at ``key`` and return the raw DeleteItem response."""
        logger.debug("Deleting item", extra={"table": self.table_name, "key": dict(key)})
        try:
            async with self._table_scope() as table:
                return await table.delete_item(Key=key)
        except BOTO_ERRORS as e:
            logger.error(
                "Failed to delete item",
                extra={"table": self.table_name, "key": dict(key), "error": str(e)},
            )
            raise RemoteServiceError.from_boto(
                e, operation="DeleteItem", details={"table": self.table_name}
            ) from e
