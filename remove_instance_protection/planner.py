"""Decide whether scale-in protection may be removed from outdated instances."""
from __future__ import annotations

from typing import Optional

from .advisories import AdvisoryStream
from .models import ActionPlan, ClassificationResult, PlanStatus


def plan_protection_removal(
    result: ClassificationResult,
    force: bool = False,
    *,
    latest_version: Optional[int] = None,
    stream: Optional[AdvisoryStream] = None,
) -> ActionPlan:
    """Build the :class:`ActionPlan` for *result*.

    A group where no instance runs the latest version is treated as
    suspicious: the latest version may be broken or not rolled out yet, so
    nothing is changed unless *force* is set.
    """

    if stream is None:
        stream = AdvisoryStream()

    def build(proceed: bool, status: PlanStatus) -> ActionPlan:
        return ActionPlan(
            to_unprotect=result.to_unprotect,
            stale_unprotected=result.stale_unprotected,
            latest_ids=result.latest_ids,
            proceed=proceed,
            status=status,
        )

    if not result.to_unprotect:
        stream.info("No old instances with scale in protection enabled found")
        return build(True, PlanStatus.NOOP)

    if not result.latest_ids:
        version = f" {latest_version}" if latest_version is not None else ""
        stream.warn(f"No instances at latest Launch Template version{version} found")
        if not force:
            stream.warn("no changes made, use `--force` flag to override this behavior")
            return build(False, PlanStatus.BLOCKED)
        stream.warn("`--force` flag provided, potentially updating all instances")
        return build(True, PlanStatus.FORCED)

    return build(True, PlanStatus.READY)


__all__ = ["plan_protection_removal"]
