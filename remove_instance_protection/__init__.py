"""Remove scale-in protection from Auto Scaling Group instances on outdated launch templates."""

from __future__ import annotations

__version__ = "0.1.0"

from .advisories import Advisory, AdvisoryStream
from .classify import classify_instances, compare_version
from .core import RunResult, run_update
from .errors import MissingTemplateInfo, RemoteCallError, RemoveProtectionError
from .executor import remove_protection
from .models import (
    ActionPlan,
    AutoScalingGroupSnapshot,
    Classification,
    ClassificationResult,
    InstanceSnapshot,
    LaunchTemplateRef,
    PlanStatus,
    RunOptions,
)
from .planner import plan_protection_removal
from .target_groups import deregister_stale_targets

__all__ = [
    "ActionPlan",
    "Advisory",
    "AdvisoryStream",
    "AutoScalingGroupSnapshot",
    "Classification",
    "ClassificationResult",
    "InstanceSnapshot",
    "LaunchTemplateRef",
    "MissingTemplateInfo",
    "PlanStatus",
    "RemoteCallError",
    "RemoveProtectionError",
    "RunOptions",
    "RunResult",
    "__version__",
    "classify_instances",
    "compare_version",
    "deregister_stale_targets",
    "plan_protection_removal",
    "remove_protection",
    "run_update",
]
