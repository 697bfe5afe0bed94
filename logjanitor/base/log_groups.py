"""Log group service blueprint and the records it exchanges."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class LogGroup(BaseModel):
    """A log group descriptor as returned by the log service.

    Only ``name`` and ``creation_time`` are interpreted. Any other fields
    the service returns (``arn``, ``storedBytes``, ``retentionInDays``, ...)
    are kept as extras and carried along untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    name: str = Field(alias="logGroupName")
    creation_time: int = Field(alias="creationTime", description="Epoch milliseconds")


class LogGroupPage(BaseModel):
    """One page of a log group listing."""

    model_config = ConfigDict(frozen=True)

    items: list[LogGroup] = Field(default_factory=list)
    next_cursor: str | None = None


class LogGroupsBlueprint(ABC):
    """Abstract interface for the remote log service.

    Maps to AWS CloudWatch Logs. Implementations are expected to mix in
    :class:`~logjanitor.base.async_support.AsyncMixin` so the janitor can
    await ``alist_log_groups`` and ``adelete_log_group``.
    """

    @abstractmethod
    def list_log_groups(
        self,
        prefix: str | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> LogGroupPage:
        """Fetch a single page of log group descriptors.

        Args:
            prefix: Optional log group name prefix, filtered server-side.
            cursor: Continuation token from the previous page, or None for
                the first page.
            limit: Maximum number of descriptors in the page.

        Returns:
            The page, with ``next_cursor`` set when more results remain.
        """

    @abstractmethod
    def delete_log_group(self, name: str) -> None:
        """Delete a log group by name."""
