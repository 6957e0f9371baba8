"""Shared fixtures for the remove_instance_protection tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

import boto3
import pytest
from botocore.stub import Stubber


PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from remove_instance_protection.advisories import LOGGER
from remove_instance_protection.aws import AwsClients
from remove_instance_protection.models import (
    AutoScalingGroupSnapshot,
    InstanceSnapshot,
    LaunchTemplateRef,
)


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    """Undo handler, level and propagation changes made by ``configure_logging``."""

    handlers = list(LOGGER.handlers)
    level = LOGGER.level
    propagate = LOGGER.propagate
    yield
    LOGGER.handlers[:] = handlers
    LOGGER.setLevel(level)
    LOGGER.propagate = propagate


def _client(service: str):
    return boto3.client(
        service,
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubbed_clients() -> Iterator[Tuple[AwsClients, Dict[str, Stubber]]]:
    """Real boto3 clients with a :class:`Stubber` attached to each."""

    clients = AwsClients(
        autoscaling=_client("autoscaling"),
        ec2=_client("ec2"),
        elbv2=_client("elbv2"),
    )
    stubbers = {
        "autoscaling": Stubber(clients.autoscaling),
        "ec2": Stubber(clients.ec2),
        "elbv2": Stubber(clients.elbv2),
    }
    for stubber in stubbers.values():
        stubber.activate()
    yield clients, stubbers
    for stubber in stubbers.values():
        stubber.deactivate()


@pytest.fixture
def make_instance() -> Callable[..., InstanceSnapshot]:
    def factory(
        instance_id: str,
        version: object = "5",
        protected: bool = True,
        template: Optional[str] = "web-lt",
    ) -> InstanceSnapshot:
        return InstanceSnapshot(
            instance_id=instance_id,
            launch_template=LaunchTemplateRef(name=template, version=version),
            protected_from_scale_in=protected,
        )

    return factory


@pytest.fixture
def make_asg() -> Callable[..., AutoScalingGroupSnapshot]:
    def factory(
        instances: Iterable[InstanceSnapshot],
        target_group_arns: Iterable[str] = (),
        name: str = "web-asg",
        template: str = "web-lt",
    ) -> AutoScalingGroupSnapshot:
        return AutoScalingGroupSnapshot(
            name=name,
            launch_template_name=template,
            instances=tuple(instances),
            target_group_arns=tuple(target_group_arns),
        )

    return factory


@pytest.fixture
def group_description() -> Callable[..., Dict[str, object]]:
    """Build an ``AutoScalingGroup`` entry as returned by DescribeAutoScalingGroups."""

    def factory(
        instances: Iterable[Tuple[str, str, bool]],
        name: str = "web-asg",
        template: Optional[str] = "web-lt",
        target_group_arns: Iterable[str] = (),
        mixed_instances: bool = False,
    ) -> Dict[str, object]:
        instance_entries: List[Dict[str, object]] = []
        for instance_id, version, protected in instances:
            instance_entries.append(
                {
                    "InstanceId": instance_id,
                    "AvailabilityZone": "us-east-1a",
                    "LifecycleState": "InService",
                    "HealthStatus": "Healthy",
                    "ProtectedFromScaleIn": protected,
                    "LaunchTemplate": {
                        "LaunchTemplateId": "lt-0123456789abcdef0",
                        "LaunchTemplateName": template or "other-lt",
                        "Version": version,
                    },
                }
            )
        group: Dict[str, object] = {
            "AutoScalingGroupName": name,
            "MinSize": 0,
            "MaxSize": 10,
            "DesiredCapacity": len(instance_entries),
            "DefaultCooldown": 300,
            "AvailabilityZones": ["us-east-1a"],
            "HealthCheckType": "EC2",
            "CreatedTime": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "Instances": instance_entries,
            "TargetGroupARNs": list(target_group_arns),
        }
        if template is not None:
            specification = {"LaunchTemplateName": template, "Version": "$Latest"}
            if mixed_instances:
                group["MixedInstancesPolicy"] = {
                    "LaunchTemplate": {"LaunchTemplateSpecification": specification}
                }
            else:
                group["LaunchTemplate"] = specification
        return group

    return factory
