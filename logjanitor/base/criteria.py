"""Discovery filter criteria.

:class:`FilterCriteria` is built fresh for every discovery call. Type
checks run before pydantic sees the values, so a plain string ``exclude``
is rejected rather than compiled, and a bool never passes as a timestamp.
"""

from __future__ import annotations

import math
import re
import time
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from logjanitor.base.exceptions import InvalidArgumentError
from logjanitor.base.log_groups import LogGroup


def now_millis() -> int:
    return int(time.time() * 1000)


class FilterCriteria(BaseModel):
    """Predicates applied to every discovered log group.

    Attributes:
        created_before: Epoch milliseconds; only log groups created strictly
            earlier match. Defaults to the time the criteria are built.
        prefix: Log group name prefix. Pushed down to the log service and
            re-checked locally.
        exclude: Compiled pattern; log group names it matches are dropped.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    created_before: int | float = Field(default_factory=now_millis)
    prefix: str | None = None
    exclude: re.Pattern | None = None

    @field_validator("created_before", mode="before")
    @classmethod
    def _coerce_created_before(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return int(value.timestamp() * 1000)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(
                "created_before must be a datetime or a millisecond timestamp"
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("created_before must be a finite timestamp")
        return value

    @field_validator("prefix", mode="before")
    @classmethod
    def _check_prefix(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, str):
            raise ValueError("prefix must be a string")
        return value

    @field_validator("exclude", mode="before")
    @classmethod
    def _check_exclude(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, re.Pattern):
            raise ValueError("exclude must be a compiled regular expression")
        return value

    @classmethod
    def from_options(cls, options: dict[str, Any] | None = None) -> FilterCriteria:
        """Build criteria from a dict of options, dropping None values.

        Raises:
            InvalidArgumentError: If an option has the wrong type or is unknown.
        """
        if options is None:
            options = {}
        elif not isinstance(options, dict):
            raise InvalidArgumentError("Filter options must be a dict")
        try:
            return cls(**{k: v for k, v in options.items() if v is not None})
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid filter criteria: {e}") from e

    def matches(self, log_group: LogGroup) -> bool:
        """Return True if *log_group* satisfies every predicate."""
        if not log_group.creation_time < self.created_before:
            return False
        if self.prefix and not log_group.name.startswith(self.prefix):
            return False
        if self.exclude is not None and self.exclude.search(log_group.name):
            return False
        return True
