"""Data models describing an auto scaling group and the actions planned for it."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple, Union

DEFAULT_BATCH_SIZE = 50  # SetInstanceProtection accepts at most 50 instance IDs


@dataclass(frozen=True)
class LaunchTemplateRef:
    """Launch template name and version an instance was launched from.

    ``version`` is kept as the provider returned it (usually a string) and is
    parsed when the instance is compared against the latest version.
    """

    name: Optional[str]
    version: Union[int, str, None]


@dataclass(frozen=True)
class InstanceSnapshot:
    """A single auto scaling group member as described by the provider."""

    instance_id: str
    launch_template: Optional[LaunchTemplateRef]
    protected_from_scale_in: bool


@dataclass(frozen=True)
class AutoScalingGroupSnapshot:
    """Read-only view of the auto scaling group taken once per run."""

    name: str
    launch_template_name: str
    instances: Tuple[InstanceSnapshot, ...] = ()
    target_group_arns: Tuple[str, ...] = ()


class Classification(str, Enum):
    """How an instance relates to the group's launch template."""

    LATEST = "latest"
    TEMPLATE_MISMATCH = "template-mismatch"
    OUTDATED_VERSION = "outdated-version"


@dataclass(frozen=True)
class ClassificationResult:
    """Partition of the group's instances produced by the classifier.

    ``latest_ids``, ``to_unprotect`` and ``stale_unprotected`` together cover
    every instance exactly once. ``outdated_ids`` only lists instances whose
    version lags behind and is used for reporting.
    """

    latest_ids: Tuple[str, ...] = ()
    to_unprotect: Tuple[str, ...] = ()
    stale_unprotected: Tuple[str, ...] = ()
    outdated_ids: Tuple[str, ...] = ()
    classifications: Mapping[str, Classification] = field(default_factory=dict)


class PlanStatus(str, Enum):
    NOOP = "noop"
    BLOCKED = "blocked"
    FORCED = "forced"
    READY = "ready"


@dataclass(frozen=True)
class ActionPlan:
    """Instances whose scale-in protection should be cleared, and whether to go ahead."""

    to_unprotect: Tuple[str, ...]
    stale_unprotected: Tuple[str, ...]
    latest_ids: Tuple[str, ...]
    proceed: bool
    status: PlanStatus

    def __post_init__(self) -> None:
        overlap = set(self.to_unprotect) & set(self.stale_unprotected)
        if overlap:
            raise ValueError(
                "Instances cannot both need and lack scale-in protection: "
                + ", ".join(sorted(overlap))
            )

    @property
    def has_work(self) -> bool:
        return self.proceed and bool(self.to_unprotect)


@dataclass(frozen=True)
class RegisteredTarget:
    """A target currently registered with a target group."""

    instance_id: str
    port: Optional[int] = None
    availability_zone: Optional[str] = None
    state: Optional[str] = None

    def as_target_description(self) -> Dict[str, object]:
        """Return the ``TargetDescription`` shape expected by elbv2."""

        description: Dict[str, object] = {"Id": self.instance_id}
        if self.port is not None:
            description["Port"] = self.port
        if self.availability_zone:
            description["AvailabilityZone"] = self.availability_zone
        return description

    def describe(self) -> str:
        parts = [self.instance_id]
        if self.port is not None:
            parts.append(f"port {self.port}")
        if self.state:
            parts.append(self.state)
        return " ".join(parts)


@dataclass(frozen=True)
class TargetGroupHealth:
    target_group_arn: str
    targets: Tuple[RegisteredTarget, ...] = ()


@dataclass(frozen=True)
class DeregistrationResult:
    """Targets removed (or that would be removed) from one target group."""

    target_group_arn: str
    targets: Tuple[RegisteredTarget, ...]
    dry_run: bool

    @property
    def instance_ids(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(target.instance_id for target in self.targets))


@dataclass(frozen=True)
class RunOptions:
    """Settings handed from the command line to :func:`run_update`."""

    asg_name: str
    dry_run: bool = False
    force: bool = False
    output_latest_instances: bool = False
    output_invalid_instances: bool = False
    deregister_from_target_groups: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "ActionPlan",
    "AutoScalingGroupSnapshot",
    "Classification",
    "ClassificationResult",
    "DeregistrationResult",
    "InstanceSnapshot",
    "LaunchTemplateRef",
    "PlanStatus",
    "RegisteredTarget",
    "RunOptions",
    "TargetGroupHealth",
]
