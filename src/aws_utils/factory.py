"""
Component factory.

Single source of truth for configuration: components built here take region
and endpoint from Settings (pydantic-settings, OS env + .env).
"""

from __future__ import annotations

import logging
from typing import Optional

from aws_utils.config import Settings, get_settings
from aws_utils.messaging.channel import MessageChannel
from aws_utils.notifications.publisher import NotificationPublisher
from aws_utils.records.store import RecordStore
from aws_utils.shared.logging import get_logger, log_with_context
from aws_utils.shared.session import build_session

logger = get_logger(__name__)


def _mask(s: Optional[str], keep: int = 4) -> str:
    if not s:
        return ""
    if len(s) <= keep:
        return "*" * len(s)
    return f"{s[:keep]}***"


def build_record_store(table_name: str, settings: Optional[Settings] = None) -> RecordStore:
    cfg = settings or get_settings()
    log_with_context(
        logger,
        logging.INFO,
        "Record store configured",
        table=table_name,
        region=cfg.region,
        expiry_attribute=cfg.expiry_attribute,
    )
    return RecordStore(
        table_name,
        cfg.region,
        session=build_session(cfg.region),
        endpoint_url=cfg.endpoint_url,
        expiry_attribute=cfg.expiry_attribute,
    )


def build_message_channel(
    name: str,
    owner: Optional[str] = None,
    url: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> MessageChannel:
    cfg = settings or get_settings()
    log_with_context(
        logger,
        logging.INFO,
        "Message channel configured",
        queue_name=name,
        queue_owner=_mask(owner),
        queue_url_known=bool(url),
        region=cfg.region,
    )
    return MessageChannel(
        name,
        owner,
        url,
        region=cfg.region,
        session=build_session(cfg.region),
        endpoint_url=cfg.endpoint_url,
    )


def build_notification_publisher(
    target_arn: str,
    settings: Optional[Settings] = None,
) -> NotificationPublisher:
    cfg = settings or get_settings()
    log_with_context(
        logger,
        logging.INFO,
        "Notification publisher configured",
        target_arn=target_arn,
        region=cfg.region,
    )
    return NotificationPublisher(
        target_arn,
        cfg.region,
        session=build_session(cfg.region),
        endpoint_url=cfg.endpoint_url,
    )
