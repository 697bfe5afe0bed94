"""logjanitor — find and delete stale CloudWatch Logs log groups.

Entry point for the library. Import :class:`Janitor` and await its
operations::

    import asyncio
    import re
    from logjanitor import Janitor

    janitor = Janitor({"client_config": {"region_name": "us-east-1"}})
    asyncio.run(janitor.delete_matching(
        prefix="/aws/lambda/ci-",
        created_before=cutoff,
        exclude=re.compile(r"-prod$"),
    ))
"""

from .base import (
    LogGroup,
    LogGroupPage,
    LogGroupsBlueprint,
    FilterCriteria,
    AWSConfig,
    JanitorConfig,
)
from .base.exceptions import (
    JanitorError,
    InvalidArgumentError,
    LoggingError,
    LogGroupNotFoundError,
    ThrottlingError,
    AccessDeniedError,
)
from .janitor import Janitor

__all__ = [
    "Janitor",
    "LogGroup",
    "LogGroupPage",
    "LogGroupsBlueprint",
    "FilterCriteria",
    "AWSConfig",
    "JanitorConfig",
    "JanitorError",
    "InvalidArgumentError",
    "LoggingError",
    "LogGroupNotFoundError",
    "ThrottlingError",
    "AccessDeniedError",
]
