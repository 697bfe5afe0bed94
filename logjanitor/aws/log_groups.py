"""AWS CloudWatch Logs implementation of the log groups blueprint."""

from __future__ import annotations

from typing import Any, NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from logjanitor.base.async_support import AsyncMixin
from logjanitor.base.config import AWSConfig, MAX_DESCRIBE_LIMIT
from logjanitor.base.exceptions import (
    LoggingError,
    LogGroupNotFoundError,
    ThrottlingError,
    AccessDeniedError,
)
from logjanitor.base.log_groups import LogGroup, LogGroupPage, LogGroupsBlueprint

_ERROR_MAP: dict[str, type[LoggingError]] = {
    "ResourceNotFoundException": LogGroupNotFoundError,
    "ThrottlingException": ThrottlingError,
    "LimitExceededException": ThrottlingError,
    "AccessDeniedException": AccessDeniedError,
}


def _handle(e: ClientError | BotoCoreError, msg: str) -> NoReturn:
    if isinstance(e, BotoCoreError):
        # Raised before any response: bad profile, missing credentials,
        # unreachable endpoint.
        raise LoggingError(f"{msg}: {e}") from e
    exc = _ERROR_MAP.get(e.response["Error"]["Code"])
    raise (exc or LoggingError)(msg) from e


class CloudWatchLogGroups(LogGroupsBlueprint, AsyncMixin):
    """AWS CloudWatch Logs log group service.

    Attributes:
        client: boto3 CloudWatch Logs client.
    """

    def __init__(self, config: AWSConfig | None = None) -> None:
        """Initialize the CloudWatch Logs client.

        Args:
            config: AWS configuration object containing credentials and region.
                   None falls back to the boto3 default credential chain.
                   Expected attributes:
                   - aws_access_key_id: AWS access key ID
                   - aws_secret_access_key: AWS secret access key
                   - region_name: AWS region name (e.g., 'us-east-1')
                   - profile_name: Optional named profile

        Raises:
            LoggingError: If boto3 cannot build the client (e.g. unknown profile).
        """
        if config is None:
            config = AWSConfig()
        try:
            session = boto3.Session(profile_name=config.profile_name)
            self.client = session.client(
                "logs",
                aws_access_key_id=config.aws_access_key_id,
                aws_secret_access_key=config.aws_secret_access_key,
                region_name=config.region_name,
            )
        except BotoCoreError as e:
            _handle(e, "Failed to create CloudWatch Logs client")

    def list_log_groups(
        self,
        prefix: str | None = None,
        cursor: str | None = None,
        limit: int = MAX_DESCRIBE_LIMIT,
    ) -> LogGroupPage:
        """Fetch one page of CloudWatch log group descriptors.

        Args:
            prefix: Optional ``logGroupNamePrefix`` filter.
            cursor: ``nextToken`` from the previous page.
            limit: Page size, at most 50.

        Returns:
            The page of :class:`LogGroup` records and the next token, if any.

        Raises:
            ThrottlingError: If CloudWatch throttles the request.
            LoggingError: On any other CloudWatch API failure.
        """
        params: dict[str, Any] = {"limit": limit}
        if prefix:
            params["logGroupNamePrefix"] = prefix
        if cursor:
            params["nextToken"] = cursor
        try:
            resp = self.client.describe_log_groups(**params)
        except (ClientError, BotoCoreError) as e:
            _handle(e, "Failed to list log groups")
        return LogGroupPage(
            items=[LogGroup.model_validate(g) for g in resp.get("logGroups", [])],
            next_cursor=resp.get("nextToken"),
        )

    def delete_log_group(self, name: str) -> None:
        """Delete a CloudWatch Logs log group.

        Args:
            name: Log group name.

        Raises:
            LogGroupNotFoundError: If the log group does not exist.
            LoggingError: On any other CloudWatch API failure.
        """
        try:
            self.client.delete_log_group(logGroupName=name)
        except (ClientError, BotoCoreError) as e:
            _handle(e, f"Failed to delete log group '{name}'")
