"""
Pydantic configuration models for the janitor and its AWS client.

Validates configs at construction time instead of silently passing bad
values to the boto3 client or the deletion worker pool.
"""

from __future__ import annotations

import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator

# CloudWatch Logs rejects describe_log_groups limits above 50.
MAX_DESCRIBE_LIMIT = 50

# The CloudWatch Logs throttling rate is low; much more than 2 concurrent
# deletions starts to trip it.
DEFAULT_CONCURRENCY = 2


class AWSConfig(BaseModel):
    """Configuration for the CloudWatch Logs client.

    Credentials are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY,
       AWS_DEFAULT_REGION, AWS_PROFILE).
    3. If neither is set, fields are left as None so boto3 can fall back to its
       own credential chain (instance metadata, ~/.aws/credentials, etc.).
    """

    model_config = ConfigDict(extra="forbid")

    aws_access_key_id: str | None = Field(default=None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    region_name: str | None = Field(default=None, description="AWS region (e.g. 'us-east-1')")
    profile_name: str | None = Field(default=None, description="Named profile from ~/.aws/config")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing credentials."""
        env_map = {
            "aws_access_key_id": "AWS_ACCESS_KEY_ID",
            "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
            "region_name": "AWS_DEFAULT_REGION",
            "profile_name": "AWS_PROFILE",
        }
        for field, env_var in env_map.items():
            if not values.get(field):
                values[field] = os.environ.get(env_var)
        return values


class JanitorConfig(BaseModel):
    """Construction-time settings for :class:`~logjanitor.janitor.Janitor`."""

    model_config = ConfigDict(extra="forbid")

    client_config: AWSConfig | None = Field(
        default=None, description="CloudWatch Logs client settings; None uses the boto3 defaults"
    )
    concurrency: int = Field(
        default=DEFAULT_CONCURRENCY, ge=1, description="Maximum deletions in flight"
    )
    describe_limit: int = Field(
        default=MAX_DESCRIBE_LIMIT,
        ge=1,
        le=MAX_DESCRIBE_LIMIT,
        description="Page size requested from describe_log_groups",
    )


def validate_config(config: JanitorConfig | dict | None = None) -> JanitorConfig:
    """Validate and return a typed janitor config.

    Args:
        config: A :class:`JanitorConfig`, a raw configuration dictionary,
            or None for all defaults.

    Returns:
        A validated :class:`JanitorConfig`.

    Raises:
        pydantic.ValidationError: If the config is invalid.
    """
    if isinstance(config, JanitorConfig):
        return config
    return JanitorConfig(**(config or {}))


__all__ = [
    "AWSConfig",
    "JanitorConfig",
    "DEFAULT_CONCURRENCY",
    "MAX_DESCRIBE_LIMIT",
    "validate_config",
]
