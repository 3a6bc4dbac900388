"""
Exceptions raised by the record store, message channel and publisher.
"""

from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError


class AwsUtilsError(Exception):
    """Base library exception."""

    def __init__(
        self,
        message: str,
        code: str = "AWS_UTILS_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ItemNotFoundError(AwsUtilsError):
    """No live item exists for the requested key (absent or expired)."""

    def __init__(
        self,
        message: str = "No matching record found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, code="ITEM_NOT_FOUND", details=details)


class RemoteServiceError(AwsUtilsError):
    """An AWS service call failed.

    The message is the original botocore error text; the botocore exception
    itself is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, code="REMOTE_SERVICE_ERROR", details=details)
        self.operation = operation
        self.error_code = error_code

    @classmethod
    def from_boto(
        cls,
        exc: BotoCoreError | ClientError,
        operation: str,
        details: Optional[dict[str, Any]] = None,
    ) -> "RemoteServiceError":
        error_code = None
        if isinstance(exc, ClientError):
            error_code = exc.response.get("Error", {}).get("Code", "Unknown")
        return cls(
            message=str(exc),
            operation=operation,
            error_code=error_code,
            details=details,
        )


class EndpointResolutionError(AwsUtilsError):
    """The queue URL could not be resolved."""

    def __init__(
        self,
        message: str = "Unable to get Queue URL",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, code="ENDPOINT_RESOLUTION_ERROR", details=details)


# Failures coming out of aioboto3/botocore calls.
BOTO_ERRORS = (ClientError, BotoCoreError)
