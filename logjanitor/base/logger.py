"""
Structured logging for logjanitor.

Every record is a single JSON line. Records emitted inside
:meth:`JanitorLogger.run` share one ``request_id``, so the listing pages
and every deletion of one ``delete_matching`` call can be pulled out of a
log aggregator together, even though the deletions finish in no
particular order.
"""

from __future__ import annotations

import json
import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

# Correlation id of the janitor run in progress. asyncio copies it into
# every task a run spawns, so deletion workers inherit it.
_run_id: ContextVar[str | None] = ContextVar("logjanitor_run_id", default=None)

_CONTEXT_KEYS = ("request_id", "operation", "log_group", "count")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class JanitorLogger:
    """Structured logger for janitor runs."""

    def __init__(self, name: str = "logjanitor") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    @contextmanager
    def run(self) -> Iterator[str]:
        """Scope a janitor run; yields its correlation id.

        Nested runs join the outer one, so a composed operation logs under
        a single id.
        """
        current = _run_id.get()
        if current is not None:
            yield current
            return
        token = _run_id.set(uuid.uuid4().hex[:12])
        try:
            yield _run_id.get()
        finally:
            _run_id.reset(token)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        operation: str | None = None,
        log_group: str | None = None,
        count: int | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with janitor context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            operation: Janitor operation (e.g. 'delete_many').
            log_group: Log group the record refers to, if any.
            count: Number of log groups a summary record covers.
            request_id: Correlation id; defaults to the enclosing run's id,
                or a fresh one outside any run.
        """
        extra = {
            "operation": operation,
            "log_group": log_group,
            "count": count,
            "request_id": request_id or _run_id.get() or uuid.uuid4().hex[:12],
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)


# Module-level singleton
jn_logger = JanitorLogger()
