"""Command line interface for removing scale-in protection from outdated instances."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError

from . import __version__
from .advisories import LOGGER, SEVERITY_LEVELS, AdvisoryStream
from .aws import AwsClients
from .core import run_update
from .errors import RemoveProtectionError
from .models import RunOptions

LOG_FORMAT = "[%(levelname)s] %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Return parsed command line arguments."""

    parser = argparse.ArgumentParser(
        description=(
            "Remove scale-in protection from Auto Scaling Group instances running an "
            "outdated Launch Template version."
        )
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--asg", required=True, help="The ASG to update.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="If set updates are not actually performed.",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Update even when no instances are found at the latest version",
    )
    parser.add_argument(
        "--output-latest-instances",
        action="store_true",
        help="Print up-to-date instances to stdout",
    )
    parser.add_argument(
        "--output-invalid-instances",
        action="store_true",
        help="Print out-of-date instances to stdout",
    )
    parser.add_argument(
        "--deregister-from-target-groups",
        action="store_true",
        help="Remove old, unprotected instances from target groups as well",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=list(SEVERITY_LEVELS),
        default="INFO",
        help="The minimum log level to output",
    )
    parser.add_argument("--profile", help="AWS CLI profile to use", default=None)
    parser.add_argument("--region", help="AWS region to use", default=None)
    return parser.parse_args(argv)


def configure_logging(level_name: str) -> None:
    """Send advisories at or above *level_name* to stderr."""

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    LOGGER.handlers[:] = [handler]
    LOGGER.setLevel(SEVERITY_LEVELS[level_name])
    LOGGER.propagate = False


def options_from_args(args: argparse.Namespace) -> RunOptions:
    return RunOptions(
        asg_name=args.asg,
        dry_run=args.dry_run,
        force=args.force,
        output_latest_instances=args.output_latest_instances,
        output_invalid_instances=args.output_invalid_instances,
        deregister_from_target_groups=args.deregister_from_target_groups,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point used by ``python -m remove_instance_protection``."""

    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        session = boto3.Session(profile_name=args.profile, region_name=args.region)
        clients = AwsClients.from_session(session)
    except BotoCoreError as exc:
        print(f"Error: could not create AWS clients: {exc}", file=sys.stderr)
        return 1

    try:
        run_update(clients, options_from_args(args), stream=AdvisoryStream())
    except RemoveProtectionError as exc:
        print(f"Error: error updating: {exc}", file=sys.stderr)
        return 1
    return 0


__all__ = ["configure_logging", "main", "options_from_args", "parse_args"]
