"""Core orchestration for removing scale-in protection from outdated instances."""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, TextIO, Tuple

from .advisories import AdvisoryStream
from .aws import AwsClients, describe_auto_scaling_group, describe_latest_version
from .classify import classify_instances
from .executor import remove_protection
from .models import (
    ActionPlan,
    AutoScalingGroupSnapshot,
    ClassificationResult,
    DeregistrationResult,
    RunOptions,
)
from .planner import plan_protection_removal
from .target_groups import deregister_stale_targets


@dataclass
class RunResult:
    """Everything a single run looked at and did."""

    asg: AutoScalingGroupSnapshot
    latest_version: int
    classification: ClassificationResult
    plan: ActionPlan
    protection_batches: List[Tuple[str, ...]] = field(default_factory=list)
    deregistrations: List[DeregistrationResult] = field(default_factory=list)


def print_instance_ids(instance_ids: Iterable[str], out: Optional[TextIO] = None) -> None:
    """Print one instance ID per line."""

    if out is None:
        out = sys.stdout
    for instance_id in instance_ids:
        print(instance_id, file=out)


def run_update(
    clients: AwsClients,
    options: RunOptions,
    *,
    stream: Optional[AdvisoryStream] = None,
    out: Optional[TextIO] = None,
) -> RunResult:
    """Inspect ``options.asg_name`` and clear protection on its outdated instances.

    Requested instance lists are printed before anything is changed. Any
    error aborts the run; nothing already applied is rolled back.
    """

    if stream is None:
        stream = AdvisoryStream()

    stream.debug(f"describing ASG {options.asg_name}...")
    asg = describe_auto_scaling_group(clients.autoscaling, options.asg_name)

    stream.debug(
        f"ASG {asg.name} uses Launch Template {asg.launch_template_name}, describing LT..."
    )
    latest_version = describe_latest_version(clients.ec2, asg.launch_template_name)
    stream.info(
        f"ASG {asg.name} has latest version {latest_version}, looking for old instances..."
    )

    classification = classify_instances(asg, latest_version, stream)

    if options.output_latest_instances:
        print_instance_ids(classification.latest_ids, out)
    if options.output_invalid_instances:
        print_instance_ids(classification.outdated_ids, out)

    deregistrations = deregister_stale_targets(
        clients.elbv2,
        asg,
        classification,
        enabled=options.deregister_from_target_groups,
        dry_run=options.dry_run,
        stream=stream,
    )

    plan = plan_protection_removal(
        classification,
        options.force,
        latest_version=latest_version,
        stream=stream,
    )
    batches = remove_protection(
        plan,
        clients.autoscaling,
        asg.name,
        batch_size=options.batch_size,
        dry_run=options.dry_run,
        stream=stream,
    )

    return RunResult(
        asg=asg,
        latest_version=latest_version,
        classification=classification,
        plan=plan,
        protection_batches=batches,
        deregistrations=deregistrations,
    )


__all__ = ["RunResult", "print_instance_ids", "run_update"]
