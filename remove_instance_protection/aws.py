"""Thin wrappers around the Auto Scaling, EC2 and ELBv2 APIs used by the tool."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

import boto3
from botocore.client import BaseClient

from .errors import (
    AutoScalingGroupNotFound,
    LaunchTemplateNotConfigured,
    LaunchTemplateNotFound,
    NoLatestVersion,
    RemoteCallError,
)
from .models import (
    AutoScalingGroupSnapshot,
    InstanceSnapshot,
    LaunchTemplateRef,
    RegisteredTarget,
    TargetGroupHealth,
)
from .utils import REMOTE_ERRORS, error_code

LAUNCH_TEMPLATE_NOT_FOUND_CODES = {
    "InvalidLaunchTemplateName.NotFoundException",
    "InvalidLaunchTemplateName.MalformedException",
}


@dataclass(frozen=True)
class AwsClients:
    """The boto3 clients a run needs."""

    autoscaling: BaseClient
    ec2: BaseClient
    elbv2: BaseClient

    @classmethod
    def from_session(cls, session: boto3.session.Session) -> "AwsClients":
        return cls(
            autoscaling=session.client("autoscaling"),
            ec2=session.client("ec2"),
            elbv2=session.client("elbv2"),
        )


def resolve_launch_template_name(group: Dict[str, Any]) -> Optional[str]:
    """Return the launch template name from an ``AutoScalingGroup`` description.

    Groups using a mixed instances policy carry the template inside the
    policy rather than at the top level.
    """

    template = group.get("LaunchTemplate")
    if template and template.get("LaunchTemplateName"):
        return template["LaunchTemplateName"]

    policy = group.get("MixedInstancesPolicy") or {}
    specification = (policy.get("LaunchTemplate") or {}).get("LaunchTemplateSpecification") or {}
    return specification.get("LaunchTemplateName")


def instance_from_description(instance: Dict[str, Any]) -> InstanceSnapshot:
    template = instance.get("LaunchTemplate")
    launch_template = None
    if template is not None:
        launch_template = LaunchTemplateRef(
            name=template.get("LaunchTemplateName"),
            version=template.get("Version"),
        )
    return InstanceSnapshot(
        instance_id=instance["InstanceId"],
        launch_template=launch_template,
        protected_from_scale_in=bool(instance.get("ProtectedFromScaleIn", False)),
    )


def snapshot_from_description(group: Dict[str, Any]) -> AutoScalingGroupSnapshot:
    """Build an :class:`AutoScalingGroupSnapshot` from a describe response entry."""

    name = group["AutoScalingGroupName"]
    template_name = resolve_launch_template_name(group)
    if not template_name:
        raise LaunchTemplateNotConfigured(name)

    return AutoScalingGroupSnapshot(
        name=name,
        launch_template_name=template_name,
        instances=tuple(instance_from_description(i) for i in group.get("Instances", [])),
        target_group_arns=tuple(group.get("TargetGroupARNs", [])),
    )


def describe_auto_scaling_group(client: BaseClient, asg_name: str) -> AutoScalingGroupSnapshot:
    """Describe exactly one auto scaling group by name."""

    try:
        response = client.describe_auto_scaling_groups(AutoScalingGroupNames=[asg_name])
    except REMOTE_ERRORS as exc:
        raise RemoteCallError("DescribeAutoScalingGroups", asg_name, exc) from exc

    groups = response.get("AutoScalingGroups", [])
    if len(groups) != 1:
        raise AutoScalingGroupNotFound(asg_name)
    return snapshot_from_description(groups[0])


def describe_latest_version(client: BaseClient, template_name: str) -> int:
    """Return ``LatestVersionNumber`` for the named launch template."""

    try:
        response = client.describe_launch_templates(LaunchTemplateNames=[template_name])
    except REMOTE_ERRORS as exc:
        if error_code(exc) in LAUNCH_TEMPLATE_NOT_FOUND_CODES:
            raise LaunchTemplateNotFound(template_name) from exc
        raise RemoteCallError("DescribeLaunchTemplates", template_name, exc) from exc

    templates = response.get("LaunchTemplates", [])
    if len(templates) != 1:
        raise LaunchTemplateNotFound(template_name)

    latest = templates[0].get("LatestVersionNumber")
    if latest is None:
        raise NoLatestVersion(template_name)
    return int(latest)


def describe_target_group_health(client: BaseClient, target_group_arn: str) -> TargetGroupHealth:
    """Return the targets currently registered with a target group."""

    try:
        response = client.describe_target_health(TargetGroupArn=target_group_arn)
    except REMOTE_ERRORS as exc:
        raise RemoteCallError("DescribeTargetHealth", target_group_arn, exc) from exc

    targets: List[RegisteredTarget] = []
    for description in response.get("TargetHealthDescriptions", []):
        target = description.get("Target") or {}
        if not target.get("Id"):
            continue
        targets.append(
            RegisteredTarget(
                instance_id=target["Id"],
                port=target.get("Port"),
                availability_zone=target.get("AvailabilityZone"),
                state=(description.get("TargetHealth") or {}).get("State"),
            )
        )
    return TargetGroupHealth(target_group_arn=target_group_arn, targets=tuple(targets))


def deregister_targets(
    client: BaseClient, target_group_arn: str, targets: Iterable[RegisteredTarget]
) -> None:
    descriptions = [target.as_target_description() for target in targets]
    try:
        client.deregister_targets(TargetGroupArn=target_group_arn, Targets=descriptions)
    except REMOTE_ERRORS as exc:
        raise RemoteCallError("DeregisterTargets", target_group_arn, exc) from exc


def set_instance_protection(
    client: BaseClient,
    asg_name: str,
    instance_ids: Sequence[str],
    protected: bool = False,
) -> None:
    """Set (or clear) scale-in protection for up to 50 instances of *asg_name*."""

    try:
        client.set_instance_protection(
            AutoScalingGroupName=asg_name,
            InstanceIds=list(instance_ids),
            ProtectedFromScaleIn=protected,
        )
    except REMOTE_ERRORS as exc:
        raise RemoteCallError("SetInstanceProtection", asg_name, exc) from exc


__all__ = [
    "AwsClients",
    "deregister_targets",
    "describe_auto_scaling_group",
    "describe_latest_version",
    "describe_target_group_health",
    "instance_from_description",
    "resolve_launch_template_name",
    "set_instance_protection",
    "snapshot_from_description",
]
