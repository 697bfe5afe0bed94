"""The log group janitor.

:class:`Janitor` finds stale log groups and deletes them. Discovery walks
every page of the listing in order and filters each page locally, because
the log service only filters by name prefix. Deletion runs through a small
pool of workers and stops handing out work at the first failure.

Note that the throttling rate for CloudWatch Logs operations is fairly
low, so it isn't a good plan to raise the concurrency much above 2.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Mapping, Sequence
from typing import Any

from logjanitor.aws.log_groups import CloudWatchLogGroups
from logjanitor.base.config import JanitorConfig, validate_config
from logjanitor.base.criteria import FilterCriteria
from logjanitor.base.exceptions import InvalidArgumentError
from logjanitor.base.log_groups import LogGroup, LogGroupsBlueprint
from logjanitor.base.logger import jn_logger

LogGroupRef = LogGroup | Mapping | str


def _resolve_criteria(
    criteria: FilterCriteria | dict | None, options: dict[str, Any]
) -> FilterCriteria:
    if isinstance(criteria, FilterCriteria):
        if not options:
            return criteria
        criteria = {
            "created_before": criteria.created_before,
            "prefix": criteria.prefix,
            "exclude": criteria.exclude,
        }
    elif criteria is not None and not isinstance(criteria, dict):
        raise InvalidArgumentError("criteria must be a FilterCriteria or a dict of options")
    return FilterCriteria.from_options({**(criteria or {}), **options})


def log_group_name(log_group: LogGroupRef) -> str:
    """Return the name of a log group reference.

    Args:
        log_group: A :class:`LogGroup`, a raw descriptor mapping with a
            ``logGroupName`` string, or a bare log group name.

    Raises:
        InvalidArgumentError: For any other value.
    """
    if isinstance(log_group, LogGroup):
        return log_group.name
    if isinstance(log_group, Mapping) and isinstance(log_group.get("logGroupName"), str):
        return log_group["logGroupName"]
    if isinstance(log_group, str):
        return log_group
    raise InvalidArgumentError(
        "The log group argument must be a log group name or log group object."
    )


class Janitor:
    """Discover and delete CloudWatch log groups.

    Attributes:
        config: Validated :class:`JanitorConfig`.
        client: The log service the janitor talks to. Shared by the
            discovery loop and every deletion worker.
    """

    def __init__(
        self,
        config: JanitorConfig | dict | None = None,
        client: LogGroupsBlueprint | None = None,
    ) -> None:
        """Initialize the janitor.

        Args:
            config: Janitor configuration; see :class:`JanitorConfig`.
            client: Log service to use instead of a CloudWatch Logs client
                built from ``config.client_config``.

        Raises:
            pydantic.ValidationError: If the config is invalid.
            LoggingError: If the CloudWatch Logs client cannot be built.
        """
        self.config = validate_config(config)
        self.client = client if client is not None else CloudWatchLogGroups(self.config.client_config)

    # --- Discovery ---

    async def list_all(self) -> list[LogGroup]:
        """Return descriptors for all log groups created before now."""
        return await self.list_matching()

    async def list_matching(
        self, criteria: FilterCriteria | dict | None = None, **options: Any
    ) -> list[LogGroup]:
        """Return the log groups matching the given criteria.

        Supplying a prefix is faster than the other filters, as it doesn't
        have to load every log group in the account to check against them.

        Args:
            criteria: A :class:`FilterCriteria` or a dict of options.
            **options: ``created_before`` (datetime or epoch ms),
                ``prefix`` (str), ``exclude`` (compiled regex). These
                override keys in *criteria*.

        Returns:
            Matching descriptors, in the order the log service listed them.

        Raises:
            InvalidArgumentError: If an option is malformed.
            LoggingError: If a listing call fails. Partial results are
                discarded.
        """
        criteria = _resolve_criteria(criteria, options)
        log_groups: list[LogGroup] = []
        cursor: str | None = None
        pages = 0
        with jn_logger.run():
            while True:
                page = await self.client.alist_log_groups(
                    prefix=criteria.prefix,
                    cursor=cursor,
                    limit=self.config.describe_limit,
                )
                pages += 1
                log_groups.extend(g for g in page.items if criteria.matches(g))
                if not page.next_cursor:
                    break
                cursor = page.next_cursor

            jn_logger.info(
                f"Matched log groups across {pages} pages",
                operation="list_matching",
                count=len(log_groups),
            )
        return log_groups

    # --- Deletion ---

    async def delete_one(self, log_group: LogGroupRef) -> None:
        """Delete a single log group.

        Args:
            log_group: A log group descriptor or a log group name.

        Raises:
            InvalidArgumentError: If *log_group* is neither; nothing is sent.
            LoggingError: Whatever the log service raised, unchanged.
        """
        name = log_group_name(log_group)
        await self.client.adelete_log_group(name)
        jn_logger.info("Deleted log group", operation="delete_one", log_group=name)

    async def delete_many(self, log_groups: Sequence[LogGroupRef]) -> None:
        """Delete the given log groups with bounded concurrency.

        At most ``config.concurrency`` deletions are in flight at once.
        When one fails no further deletions are started, the ones already
        in flight are allowed to finish, and then the first failure is
        raised. Deletions that completed before the failure stay deleted.

        All records of one batch carry the same ``request_id``.

        Args:
            log_groups: Log group descriptors or names.

        Raises:
            InvalidArgumentError: If *log_groups* is not a list or tuple.
            JanitorError: The first failure seen by any worker.
        """
        if isinstance(log_groups, (str, bytes, Mapping)) or not isinstance(log_groups, Sequence):
            raise InvalidArgumentError("Argument log_groups must be a list of log groups")
        if not log_groups:
            return

        queue = deque(log_groups)
        failure: Exception | None = None
        deleted = 0

        async def worker() -> None:
            nonlocal failure, deleted
            while queue and failure is None:
                log_group = queue.popleft()
                try:
                    await self.delete_one(log_group)
                except Exception as e:
                    # Only the event loop thread touches failure, so the first
                    # assignment wins.
                    if failure is None:
                        failure = e
                        jn_logger.error(
                            f"Stopping deletion after failure: {e}",
                            operation="delete_many",
                            log_group=str(getattr(log_group, "name", log_group)),
                        )
                    return
                deleted += 1

        with jn_logger.run():
            workers = min(self.config.concurrency, len(log_groups))
            await asyncio.gather(*(worker() for _ in range(workers)))

            if failure is not None:
                jn_logger.error(
                    f"Deleted {deleted} of {len(log_groups)} log groups before failing",
                    operation="delete_many",
                    count=deleted,
                )
                raise failure
            jn_logger.info("Deleted log groups", operation="delete_many", count=deleted)

    # --- Composition ---

    async def delete_matching(
        self, criteria: FilterCriteria | dict | None = None, **options: Any
    ) -> list[LogGroup]:
        """Delete every log group matching the given criteria.

        Takes the same arguments as :meth:`list_matching`; the list it
        returns is handed to :meth:`delete_many` as is. Listing and
        deletion records share one ``request_id``.

        Returns:
            The log groups that were deleted.
        """
        with jn_logger.run():
            log_groups = await self.list_matching(criteria, **options)
            await self.delete_many(log_groups)
        return log_groups
