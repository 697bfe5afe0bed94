"""logjanitor CLI — list or delete stale log groups from the command line.

Usage examples::

    logjanitor --region us-east-1 list --prefix /aws/lambda/ --older-than-days 30
    logjanitor delete --prefix /aws/codebuild/ --exclude='-prod$' --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import re
import sys
import time
from datetime import datetime
from typing import Any

_DAY_MILLIS = 24 * 60 * 60 * 1000


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``logjanitor`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="logjanitor",
        description="Find and delete stale CloudWatch log groups",
    )
    parser.add_argument("--region", "-r", help="AWS region (e.g. us-east-1)")
    parser.add_argument("--profile", help="AWS named profile")
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Maximum deletions in flight (default 2)",
    )

    filters = argparse.ArgumentParser(add_help=False)
    filters.add_argument("--prefix", "-p", help="Log group name prefix")
    age = filters.add_mutually_exclusive_group()
    age.add_argument(
        "--older-than-days",
        type=float,
        help="Only match log groups created more than this many days ago",
    )
    age.add_argument(
        "--created-before",
        type=datetime.fromisoformat,
        help="Only match log groups created before this ISO 8601 timestamp",
    )
    filters.add_argument(
        "--exclude", "-x",
        help="Regular expression; matching log group names are skipped "
        "(write --exclude=PATTERN when it starts with '-')",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", parents=[filters], help="List matching log groups")
    delete = sub.add_parser("delete", parents=[filters], help="Delete matching log groups")
    delete.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be deleted without deleting it",
    )
    return parser


def _criteria(ns: argparse.Namespace) -> dict[str, Any]:
    """Translate parsed filter flags into janitor filter options."""
    options: dict[str, Any] = {"prefix": ns.prefix}
    if ns.older_than_days is not None:
        options["created_before"] = int(time.time() * 1000 - ns.older_than_days * _DAY_MILLIS)
    elif ns.created_before is not None:
        options["created_before"] = ns.created_before
    if ns.exclude:
        options["exclude"] = re.compile(ns.exclude)
    return options


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, builds a :class:`~logjanitor.janitor.Janitor` and runs
    the requested command. Matching (or deleted) log groups are printed as
    JSON.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        options = _criteria(ns)
    except re.error as e:
        print(f"Invalid --exclude pattern: {e}", file=sys.stderr)
        sys.exit(1)

    # Lazy-import to avoid loading boto3 for --help
    from logjanitor.base.exceptions import JanitorError
    from logjanitor.janitor import Janitor

    config: dict[str, Any] = {
        "client_config": {"region_name": ns.region, "profile_name": ns.profile},
    }
    if ns.concurrency is not None:
        config["concurrency"] = ns.concurrency

    try:
        janitor = Janitor(config)
    except (ValueError, JanitorError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if ns.command == "delete" and not ns.dry_run:
            log_groups = asyncio.run(janitor.delete_matching(**options))
        else:
            log_groups = asyncio.run(janitor.list_matching(**options))
    except JanitorError as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps([g.name for g in log_groups], indent=2))


if __name__ == "__main__":
    main()
