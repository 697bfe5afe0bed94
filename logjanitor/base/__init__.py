"""Log service blueprint, records, config and core utilities.

Import :class:`LogGroupsBlueprint` to plug a custom log service into the
janitor.
"""

from .log_groups import LogGroup, LogGroupPage, LogGroupsBlueprint
from .criteria import FilterCriteria
from .config import AWSConfig, JanitorConfig


__all__ = [
    "LogGroup",
    "LogGroupPage",
    "LogGroupsBlueprint",
    "FilterCriteria",
    "AWSConfig",
    "JanitorConfig",
]
