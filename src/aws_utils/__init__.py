"""
Async helpers for DynamoDB records, SQS queues and SNS topics.
"""

from aws_utils.messaging.channel import EndpointState, MessageChannel
from aws_utils.notifications.publisher import NotificationPublisher
from aws_utils.records.store import RecordStore
from aws_utils.shared import timestamp
from aws_utils.shared.exceptions import (
    AwsUtilsError,
    EndpointResolutionError,
    ItemNotFoundError,
    RemoteServiceError,
)
from aws_utils.shared.logging import get_logger, setup_logging

__all__ = [
    "AwsUtilsError",
    "EndpointResolutionError",
    "EndpointState",
    "ItemNotFoundError",
    "MessageChannel",
    "NotificationPublisher",
    "RecordStore",
    "RemoteServiceError",
    "get_logger",
    "setup_logging",
    "timestamp",
]
