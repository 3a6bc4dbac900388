"""
aioboto3 session and client helpers.

Components either get a ready client injected (tests, callers that manage
their own client lifetime) or open a short-lived one per operation from an
aioboto3 session.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import aioboto3


def build_session(
    region: str,
    *,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
) -> aioboto3.Session:
    """Create an aioboto3 session; credentials fall back to the default chain."""
    return aioboto3.Session(
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        aws_session_token=session_token,
        region_name=region,
    )


@asynccontextmanager
async def client_scope(
    session_factory,
    service_name: str,
    injected: Any = None,
    endpoint_url: Optional[str] = None,
) -> AsyncIterator[Any]:
    """Yield the injected client, or a fresh service client for one operation."""
    if injected is not None:
        yield injected
        return

    session: aioboto3.Session = session_factory()
    async with session.client(service_name, endpoint_url=endpoint_url) as client:
        yield client


@asynccontextmanager
async def table_scope(
    session_factory,
    table_name: str,
    injected: Any = None,
    endpoint_url: Optional[str] = None,
) -> AsyncIterator[Any]:
    """Yield the injected table, or a DynamoDB Table resource for one operation."""
    if injected is not None:
        yield injected
        return

    session: aioboto3.Session = session_factory()
    async with session.resource("dynamodb", endpoint_url=endpoint_url) as dynamodb:
        yield await dynamodb.Table(table_name)
