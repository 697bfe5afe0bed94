"""AWS implementations of the logjanitor blueprints."""

from .log_groups import CloudWatchLogGroups

__all__ = ["CloudWatchLogGroups"]
