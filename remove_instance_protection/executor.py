"""Apply an :class:`ActionPlan` by clearing scale-in protection in batches."""
from __future__ import annotations

from typing import List, Optional, Tuple

from botocore.client import BaseClient

from .advisories import AdvisoryStream
from .aws import set_instance_protection
from .models import DEFAULT_BATCH_SIZE, ActionPlan
from .utils import batch_iterable


def remove_protection(
    plan: ActionPlan,
    client: Optional[BaseClient],
    asg_name: str,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    dry_run: bool = False,
    stream: Optional[AdvisoryStream] = None,
) -> List[Tuple[str, ...]]:
    """Clear scale-in protection for ``plan.to_unprotect`` and return the batches processed.

    Batches are contiguous, submitted one at a time in plan order. A failing
    call raises :class:`~remove_instance_protection.errors.RemoteCallError`
    straight away; batches already submitted stay applied and re-running the
    tool picks up whatever is left.
    """

    if stream is None:
        stream = AdvisoryStream()
    if not plan.has_work:
        return []
    if batch_size < 1:
        raise ValueError(f"Batch size must be at least 1, got {batch_size}")
    if client is None and not dry_run:
        raise ValueError("An autoscaling client is required unless dry_run is set")

    count = len(plan.to_unprotect)
    if dry_run:
        stream.dryrun(f"Removing scale in protection for {count} instances")
    else:
        stream.info(f"Removing scale in protection for {count} instances")

    processed: List[Tuple[str, ...]] = []
    for batch in batch_iterable(plan.to_unprotect, batch_size):
        instance_ids = tuple(batch)
        if dry_run:
            for instance_id in instance_ids:
                stream.dryrun(
                    f"would remove instance protection on instanceId {instance_id}",
                    instance_id=instance_id,
                )
            processed.append(instance_ids)
            continue

        stream.debug(f"calling SetInstanceProtection with {len(instance_ids)} instances")
        set_instance_protection(client, asg_name, instance_ids, protected=False)
        for instance_id in instance_ids:
            stream.debug(
                f"instance protection removed for instance: {instance_id}",
                instance_id=instance_id,
            )
        processed.append(instance_ids)
    return processed


__all__ = ["remove_protection"]
