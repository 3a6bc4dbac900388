"""Tests for the package surface."""

import aws_utils
from aws_utils.messaging.channel import MessageChannel
from aws_utils.notifications.publisher import NotificationPublisher
from aws_utils.records.store import RecordStore
from aws_utils.shared import timestamp
from aws_utils.shared.exceptions import (
    AwsUtilsError,
    EndpointResolutionError,
    ItemNotFoundError,
    RemoteServiceError,
)


def test_exports_components() -> None:
    assert aws_utils.RecordStore is RecordStore
    assert aws_utils.MessageChannel is MessageChannel
    assert aws_utils.NotificationPublisher is NotificationPublisher
    assert aws_utils.timestamp is timestamp


def test_error_taxonomy() -> None:
    for cls in (ItemNotFoundError, RemoteServiceError, EndpointResolutionError):
        assert issubclass(cls, AwsUtilsError)
        assert getattr(aws_utils, cls.__name__) is cls

    assert not issubclass(EndpointResolutionError, RemoteServiceError)
    assert not issubclass(ItemNotFoundError, RemoteServiceError)


def test_error_codes() -> None:
    assert ItemNotFoundError().code == "ITEM_NOT_FOUND"
    assert EndpointResolutionError().code == "ENDPOINT_RESOLUTION_ERROR"
    assert EndpointResolutionError().message == "Unable to get Queue URL"
    assert RemoteServiceError("boom").code == "REMOTE_SERVICE_ERROR"
