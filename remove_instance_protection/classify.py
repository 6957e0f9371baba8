"""Classify auto scaling group instances against the latest launch template version."""
from __future__ import annotations

import re
from typing import Dict, List, Optional

from .advisories import AdvisoryStream
from .errors import MissingTemplateInfo
from .models import AutoScalingGroupSnapshot, Classification, ClassificationResult, InstanceSnapshot

_VERSION_PATTERN = re.compile(r"[0-9]+")


def parse_template_version(instance: InstanceSnapshot) -> int:
    """Return the instance's launch template version as an integer."""

    template = instance.launch_template
    if template is None or template.version is None or template.name is None:
        raise MissingTemplateInfo(instance.instance_id)

    version = template.version
    if isinstance(version, bool):
        raise MissingTemplateInfo(instance.instance_id, "invalid instance Launch Template Version")
    if isinstance(version, int):
        if version < 0:
            raise MissingTemplateInfo(instance.instance_id, "invalid instance Launch Template Version")
        return version
    if not _VERSION_PATTERN.fullmatch(str(version)):
        raise MissingTemplateInfo(
            instance.instance_id,
            f"invalid instance Launch Template Version {version!r}",
        )
    return int(version)


def compare_version(
    instance: InstanceSnapshot, template_name: str, latest_version: int
) -> Classification:
    """Classify a single instance. Raises :class:`MissingTemplateInfo` on bad input."""

    version = parse_template_version(instance)
    if instance.launch_template.name != template_name:
        return Classification.TEMPLATE_MISMATCH
    if version != latest_version:
        return Classification.OUTDATED_VERSION
    return Classification.LATEST


def classify_instances(
    asg: AutoScalingGroupSnapshot,
    latest_version: int,
    stream: Optional[AdvisoryStream] = None,
) -> ClassificationResult:
    """Partition the group's instances into latest, to-unprotect and stale buckets.

    Instances are visited in the order the provider returned them so batches
    built from the result are deterministic for a given snapshot. The first
    instance without usable launch template data aborts the whole pass.
    """

    if stream is None:
        stream = AdvisoryStream()
    latest_ids: List[str] = []
    to_unprotect: List[str] = []
    stale_unprotected: List[str] = []
    outdated_ids: List[str] = []
    classifications: Dict[str, Classification] = {}

    for instance in asg.instances:
        instance_id = instance.instance_id
        classification = compare_version(instance, asg.launch_template_name, latest_version)
        classifications[instance_id] = classification

        if classification is Classification.LATEST:
            latest_ids.append(instance_id)
            continue

        template = instance.launch_template
        if classification is Classification.TEMPLATE_MISMATCH:
            stream.warn(
                f"instance {instance_id} has different Launch Template than ASG: "
                f"{template.name}:{template.version}",
                instance_id=instance_id,
            )
        else:
            outdated_ids.append(instance_id)
            stream.debug(
                f"instance {instance_id} has old version {template.version}",
                instance_id=instance_id,
            )

        if instance.protected_from_scale_in:
            to_unprotect.append(instance_id)
        else:
            stream.debug(
                f"old instance {instance_id} is already not protected from scale-in, skipping",
                instance_id=instance_id,
            )
            stale_unprotected.append(instance_id)

    return ClassificationResult(
        latest_ids=tuple(latest_ids),
        to_unprotect=tuple(to_unprotect),
        stale_unprotected=tuple(stale_unprotected),
        outdated_ids=tuple(outdated_ids),
        classifications=classifications,
    )


__all__ = ["classify_instances", "compare_version", "parse_template_version"]
