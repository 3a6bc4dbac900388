"""
SQS message channel with lazy, cached queue URL resolution.

A channel is addressed by queue name (plus an optional owner account id).
The queue URL is looked up on first use and reused for the lifetime of the
instance. Concurrent first callers share one in-flight lookup.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

import aioboto3

from aws_utils.config import get_settings
from aws_utils.shared.exceptions import (
    BOTO_ERRORS,
    EndpointResolutionError,
    RemoteServiceError,
)
from aws_utils.shared.logging import get_logger
from aws_utils.shared.session import build_session, client_scope

logger = get_logger(__name__)


class EndpointState(str, Enum):
    """Resolution state of a channel's queue URL."""

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


@dataclass(eq=False)
class _PendingMessage:
    body: str
    in_flight: bool = False


def with_queue_url(queue_url: str, params: dict[str, Any]) -> dict[str, Any]:
    """Return ``params`` with ``QueueUrl`` set, keeping one the caller supplied."""
    merged = dict(params)
    merged.setdefault("QueueUrl", queue_url)
    return merged


class MessageChannel:
    """Send, receive and delete messages on one SQS queue."""

    def __init__(
        self,
        name: str,
        owner: Optional[str] = None,
        url: Optional[str] = None,
        *,
        region: Optional[str] = None,
        client: Any = None,
        session: Optional[aioboto3.Session] = None,
        endpoint_url: Optional[str] = None,
    ) -> None:
        """
        Initialize the channel.

        Args:
            name: SQS queue name.
            owner: AWS account id owning the queue, if not the caller's.
            url: Known queue URL; skips resolution entirely.
            region: AWS region; defaults to the configured region.
            client: Optional SQS client for dependency injection.
            session: Optional aioboto3 session to open clients from.
            endpoint_url: Optional endpoint override.
        """
        settings = get_settings()
        self._name = name
        self._owner = owner
        self._url = url
        self._state = EndpointState.RESOLVED if url else EndpointState.UNRESOLVED
        self._resolving: Optional[asyncio.Task[str]] = None
        self._pending: list[_PendingMessage] = []
        self._default_max_count = settings.receive_max_messages

        self.region = region or settings.region
        self.endpoint_url = endpoint_url or settings.endpoint_url
        self._client = client
        self._session = session

    @property
    def name(self) -> str:
        return self._name

    @property
    def owner(self) -> Optional[str]:
        return self._owner

    @property
    def url(self) -> Optional[str]:
        return self._url

    @property
    def state(self) -> EndpointState:
        return self._state

    @property
    def pending(self) -> tuple[str, ...]:
        """Message bodies waiting for the next ``send_pending``."""
        return tuple(message.body for message in self._pending)

    def _get_session(self) -> aioboto3.Session:
        if self._session is None:
            self._session = build_session(self.region)
        return self._session

    def _client_scope(self):
        return client_scope(
            self._get_session,
            "sqs",
            injected=self._client,
            endpoint_url=self.endpoint_url,
        )

    async def _call(
        self,
        operation: str,
        request: Callable[[Any], Awaitable[dict[str, Any]]],
    ) -> dict[str, Any]:
        try:
            async with self._client_scope() as sqs:
                return await request(sqs)
        except BOTO_ERRORS as e:
            logger.error(
                "SQS call failed",
                extra={"queue_name": self._name, "operation": operation, "error": str(e)},
            )
            raise RemoteServiceError.from_boto(
                e, operation=operation, details={"queue_name": self._name}
            ) from e

    async def resolve_endpoint(self) -> str:
        """
        Look up the queue URL and cache it on the channel.

        Raises:
            RemoteServiceError: GetQueueUrl failed; the channel stays unresolved.
        """
        params: dict[str, Any] = {"QueueName": self._name}
        if self._owner:
            params["QueueOwnerAWSAccountId"] = self._owner

        response = await self._call("GetQueueUrl", lambda sqs: sqs.get_queue_url(**params))
        self._url = response["QueueUrl"]
        self._state = EndpointState.RESOLVED
        logger.info(
            "Queue URL resolved",
            extra={"queue_name": self._name, "queue_url": self._url},
        )
        return self._url

    async def _ensure_endpoint(self) -> str:
        if self._state is EndpointState.RESOLVED and self._url:
            return self._url

        if self._resolving is None:
            self._resolving = asyncio.ensure_future(self.resolve_endpoint())
        resolving = self._resolving

        try:
            return await asyncio.shield(resolving)
        except (RemoteServiceError, KeyError) as e:
            raise EndpointResolutionError(details={"queue_name": self._name}) from e
        finally:
            if resolving.done() and self._resolving is resolving:
                self._resolving = None

    async def send_message(
        self,
        body: str,
        *,
        delay_seconds: Optional[int] = None,
        group_id: Optional[str] = None,
        deduplication_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Send one message and return the SendMessage response (incl. MessageId)."""
        queue_url = await self._ensure_endpoint()

        params: dict[str, Any] = {"MessageBody": body}
        if delay_seconds is not None:
            params["DelaySeconds"] = delay_seconds
        # FIFO queues only
        if group_id is not None:
            params["MessageGroupId"] = group_id
        if deduplication_id is not None:
            params["MessageDeduplicationId"] = deduplication_id

        params = with_queue_url(queue_url, params)
        response = await self._call("SendMessage", lambda sqs: sqs.send_message(**params))
        logger.debug(
            "sqs_message_sent",
            extra={"queue_url": queue_url, "message_id": response.get("MessageId")},
        )
        return response

    async def receive_messages(
        self,
        max_count: Optional[int] = None,
        *,
        wait_time_seconds: Optional[int] = None,
        visibility_timeout: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Receive up to ``max_count`` messages (default 10); ``[]`` when none are waiting."""
        queue_url = await self._ensure_endpoint()

        params: dict[str, Any] = {
            "MaxNumberOfMessages": max_count if max_count is not None else self._default_max_count,
        }
        if wait_time_seconds is not None:
            params["WaitTimeSeconds"] = wait_time_seconds
        if visibility_timeout is not None:
            params["VisibilityTimeout"] = visibility_timeout

        params = with_queue_url(queue_url, params)
        response = await self._call("ReceiveMessage", lambda sqs: sqs.receive_message(**params))
        messages = response.get("Messages") or []
        if messages:
            logger.debug(
                "sqs_messages_received",
                extra={"count": len(messages), "queue_url": queue_url},
            )
        return messages

    async def delete_message(self, receipt_handle: str) -> dict[str, Any]:
        """Delete a received message via its receipt handle."""
        queue_url = await self._ensure_endpoint()
        params = with_queue_url(queue_url, {"ReceiptHandle": receipt_handle})
        response = await self._call("DeleteMessage", lambda sqs: sqs.delete_message(**params))
        logger.debug(
            "sqs_message_deleted",
            extra={"queue_url": queue_url, "receipt_handle": receipt_handle},
        )
        return response

    async def send_batch(self, entries: list[dict[str, Any]]) -> dict[str, Any]:
        """Submit pre-built SendMessageBatch entries as a single request."""
        queue_url = await self._ensure_endpoint()
        params = with_queue_url(queue_url, {"Entries": list(entries)})
        response = await self._call("SendMessageBatch", lambda sqs: sqs.send_message_batch(**params))
        failed = response.get("Failed") or []
        if failed:
            logger.warning(
                "sqs_batch_entries_failed",
                extra={"queue_url": queue_url, "failed": len(failed), "total": len(entries)},
            )
        return response

    def add_pending(self, body: str) -> None:
        """Buffer a message body for the next ``send_pending``."""
        self._pending.append(_PendingMessage(body))

    async def send_pending(self) -> dict[str, Any]:
        """
        Send every buffered body not already being sent as one batch.

        Sent bodies leave the buffer only once the batch call returns; after
        a failure they stay buffered so the caller can retry. Bodies added
        while a batch is in flight are kept for the next call.
        """
        batch = [message for message in self._pending if not message.in_flight]
        if not batch:
            return {"Successful": [], "Failed": []}

        for message in batch:
            message.in_flight = True
        entries = [
            {"Id": str(index), "MessageBody": message.body}
            for index, message in enumerate(batch)
        ]
        try:
            response = await self.send_batch(entries)
        except BaseException:
            for message in batch:
                message.in_flight = False
            raise

        sent = {id(message) for message in batch}
        self._pending = [message for message in self._pending if id(message) not in sent]
        return response
