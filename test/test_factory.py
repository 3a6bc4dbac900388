"""
Tests for the component factory.
"""

import logging

import aioboto3

from aws_utils.config import Settings
from aws_utils.factory import (
    build_message_channel,
    build_notification_publisher,
    build_record_store,
)
from aws_utils.messaging.channel import EndpointState


def _settings() -> Settings:
    return Settings(
        region="us-east-1",
        endpoint_url="http://localhost:4566",
        expiry_attribute="ttl",
    )


def test_build_record_store() -> None:
    store = build_record_store("LoanCacheTable", settings=_settings())

    assert store.table_name == "LoanCacheTable"
    assert store.region == "us-east-1"
    assert store.endpoint_url == "http://localhost:4566"
    assert store.expiry_attribute == "ttl"
    assert isinstance(store._get_session(), aioboto3.Session)


def test_build_message_channel() -> None:
    channel = build_message_channel("a queue", owner="123456789012", settings=_settings())

    assert channel.name == "a queue"
    assert channel.owner == "123456789012"
    assert channel.state is EndpointState.UNRESOLVED
    assert channel.region == "us-east-1"


def test_build_message_channel_with_known_url() -> None:
    channel = build_message_channel("a queue", url="https://sqs/a-queue", settings=_settings())

    assert channel.state is EndpointState.RESOLVED
    assert channel.url == "https://sqs/a-queue"


def test_build_notification_publisher() -> None:
    publisher = build_notification_publisher("arn:aws:sns:us-east-1:1:topic", settings=_settings())

    assert publisher.target_arn == "arn:aws:sns:us-east-1:1:topic"
    assert publisher.build_message("x")["TargetArn"] == "arn:aws:sns:us-east-1:1:topic"
    assert publisher.region == "us-east-1"


def test_factory_logs_resolved_configuration(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="aws_utils.factory"):
        build_message_channel("a queue", owner="123456789012", settings=_settings())

    record = caplog.records[-1]
    assert record.getMessage() == "Message channel configured"
    assert record.extra_data["queue_owner"] == "1234***"
    assert record.extra_data["region"] == "us-east-1"
