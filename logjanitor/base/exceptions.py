"""
logjanitor exception hierarchy.

:class:`InvalidArgumentError` covers bad caller input and is raised before
any request reaches the log service. :class:`LoggingError` and its
sub-exceptions are raised by the log service adapter and pass through the
janitor unchanged.
"""


# ── Base ──────────────────────────────────────────────────────────────
class JanitorError(Exception):
    """Root exception for all logjanitor errors."""


# ── Caller input ──────────────────────────────────────────────────────
class InvalidArgumentError(JanitorError):
    """Malformed filter criterion, log group reference or deletion batch."""


# ── Log service ───────────────────────────────────────────────────────
class LoggingError(JanitorError):
    """Base exception for log service operations."""


class LogGroupNotFoundError(LoggingError):
    """Log group not found."""


class ThrottlingError(LoggingError):
    """Request rate exceeded."""


class AccessDeniedError(LoggingError):
    """Caller lacks permission for the operation."""
