"""
Pytest configuration and fixtures.

AWS clients are replaced by AsyncMock stand-ins exposing the same coroutine
methods as the aioboto3 clients and DynamoDB Table resource.
"""
from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError

NOW = 1_700_000_000


def client_error(message: str, code: str = "InternalError", operation: str = "Operation") -> ClientError:
    """Build a botocore ClientError the way the service would return it."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "AWS_UTILS_REGION",
        "AWS_UTILS_ENDPOINT_URL",
        "AWS_UTILS_LOG_LEVEL",
        "AWS_UTILS_EXPIRY_ATTRIBUTE",
        "AWS_UTILS_RECEIVE_MAX_MESSAGES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def now() -> int:
    return NOW


@pytest.fixture
def table() -> MagicMock:
    mock = MagicMock()
    mock.put_item = AsyncMock(return_value={"ResponseMetadata": {"HTTPStatusCode": 200}})
    mock.get_item = AsyncMock(return_value={})
    mock.delete_item = AsyncMock(return_value={"ResponseMetadata": {"HTTPStatusCode": 200}})
    return mock


@pytest.fixture
def sqs() -> MagicMock:
    mock = MagicMock()
    mock.get_queue_url = AsyncMock(return_value={"QueueUrl": "a url"})
    mock.send_message = AsyncMock(return_value={"MessageId": "msg-1"})
    mock.receive_message = AsyncMock(return_value={})
    mock.delete_message = AsyncMock(return_value={})
    mock.send_message_batch = AsyncMock(return_value={"Successful": [], "Failed": []})
    return mock


@pytest.fixture
def sns() -> MagicMock:
    mock = MagicMock()
    mock.publish = AsyncMock(return_value={"MessageId": "sns-1"})
    return mock


def last_kwargs(method: AsyncMock) -> dict[str, Any]:
    assert method.await_args is not None
    return method.await_args.kwargs
