"""Remove stale, already unprotected instances from the group's target groups."""
from __future__ import annotations

from typing import Collection, List, Optional, Tuple

from botocore.client import BaseClient

from .advisories import AdvisoryStream
from .aws import deregister_targets, describe_target_group_health
from .models import (
    AutoScalingGroupSnapshot,
    ClassificationResult,
    DeregistrationResult,
    RegisteredTarget,
    TargetGroupHealth,
)


def should_deregister(result: ClassificationResult, enabled: bool) -> bool:
    """Return ``True`` when deregistration may run for *result*.

    Both an up-to-date instance and a stale unprotected one must exist;
    otherwise pulling targets could leave a target group with nothing
    current behind it.
    """

    return enabled and bool(result.latest_ids) and bool(result.stale_unprotected)


def select_stale_targets(
    health: TargetGroupHealth, stale_ids: Collection[str]
) -> Tuple[RegisteredTarget, ...]:
    """Return the registered targets of *health* whose instance is in *stale_ids*.

    Every registered target counts whatever its ``TargetHealth.State``; an
    unhealthy or draining stale target is still removed.
    """

    stale = set(stale_ids)
    return tuple(target for target in health.targets if target.instance_id in stale)


def deregister_stale_targets(
    client: BaseClient,
    asg: AutoScalingGroupSnapshot,
    result: ClassificationResult,
    *,
    enabled: bool = True,
    dry_run: bool = False,
    stream: Optional[AdvisoryStream] = None,
) -> List[DeregistrationResult]:
    """Deregister stale unprotected instances from every target group on *asg*.

    Target groups are handled one at a time in the order the group lists
    them. The first failing call aborts the remaining groups.
    """

    if stream is None:
        stream = AdvisoryStream()
    if not should_deregister(result, enabled):
        if enabled:
            stream.debug("Skipping target group deregistration: no latest and stale instance pair")
        return []

    results: List[DeregistrationResult] = []
    for target_group_arn in asg.target_group_arns:
        health = describe_target_group_health(client, target_group_arn)
        targets = select_stale_targets(health, result.stale_unprotected)

        if dry_run:
            for target in targets:
                stream.dryrun(
                    f"would remove instance {target.describe()} from target group {target_group_arn}",
                    instance_id=target.instance_id,
                    target_group=target_group_arn,
                )
        elif targets:
            deregister_targets(client, target_group_arn, targets)
            stream.info(
                f"Removed {len(targets)} instances from {target_group_arn}",
                target_group=target_group_arn,
            )
        else:
            stream.debug(
                f"No stale instances registered with {target_group_arn}",
                target_group=target_group_arn,
            )

        results.append(
            DeregistrationResult(
                target_group_arn=target_group_arn,
                targets=targets,
                dry_run=dry_run,
            )
        )
    return results


__all__ = ["deregister_stale_targets", "select_stale_targets", "should_deregister"]
