"""SNS topic publisher."""

from __future__ import annotations

import json
from typing import Any, Optional

import aioboto3

from aws_utils.config import get_settings
from aws_utils.shared.exceptions import BOTO_ERRORS, RemoteServiceError
from aws_utils.shared.logging import get_logger
from aws_utils.shared.session import build_session, client_scope

logger = get_logger(__name__)


def _json_default(obj: Any) -> str:
    """Fallback JSON serializer."""
    return str(obj)


class NotificationPublisher:
    """Publishes payloads to a fixed SNS target."""

    def __init__(
        self,
        target_arn: str,
        region: Optional[str] = None,
        *,
        client: Any = None,
        session: Optional[aioboto3.Session] = None,
        endpoint_url: Optional[str] = None,
    ) -> None:
        settings = get_settings()
        self._target_arn = target_arn
        self.region = region or settings.region
        self.endpoint_url = endpoint_url or settings.endpoint_url
        self._client = client
        self._session = session

    @property
    def target_arn(self) -> str:
        return self._target_arn

    def _get_session(self) -> aioboto3.Session:
        if self._session is None:
            self._session = build_session(self.region)
        return self._session

    def build_message(self, payload: Any) -> dict[str, str]:
        """
        Build the Publish parameters for ``payload`` without sending anything.

        Strings go out unchanged; anything else is serialized to compact JSON.
        """
        if isinstance(payload, str):
            message = payload
        else:
            message = json.dumps(payload, separators=(",", ":"), default=_json_default)
        return {"Message": message, "TargetArn": self._target_arn}

    async def publish(self, payload: Any) -> dict[str, Any]:
        """Publish ``payload`` and return the raw Publish response."""
        params = self.build_message(payload)
        try:
            async with client_scope(
                self._get_session,
                "sns",
                injected=self._client,
                endpoint_url=self.endpoint_url,
            ) as sns:
                response = await sns.publish(**params)
        except BOTO_ERRORS as e:
            logger.error(
                "Failed to publish notification",
                extra={"target_arn": self._target_arn, "error": str(e)},
            )
            raise RemoteServiceError.from_boto(
                e, operation="Publish", details={"target_arn": self._target_arn}
            ) from e

        logger.info(
            "Notification published",
            extra={"target_arn": self._target_arn, "message_id": response.get("MessageId")},
        )
        return response
