"""Tests for the protection action planner."""

from __future__ import annotations

import pytest

from remove_instance_protection.advisories import AdvisoryStream
from remove_instance_protection.models import ActionPlan, ClassificationResult, PlanStatus
from remove_instance_protection.planner import plan_protection_removal


def test_plan_without_protected_old_instances_is_noop() -> None:
    result = ClassificationResult(latest_ids=("A",), stale_unprotected=("C",))
    stream = AdvisoryStream()

    plan = plan_protection_removal(result, stream=stream)

    assert plan.status is PlanStatus.NOOP
    assert plan.proceed
    assert not plan.has_work
    assert stream.by_severity("INFO")


def test_plan_blocks_when_no_instance_is_latest() -> None:
    """Unprotecting every instance requires --force."""

    result = ClassificationResult(to_unprotect=("A", "B"))
    stream = AdvisoryStream()

    plan = plan_protection_removal(result, force=False, latest_version=5, stream=stream)

    assert plan.status is PlanStatus.BLOCKED
    assert not plan.proceed
    assert not plan.has_work
    messages = [record.message for record in stream.by_severity("WARN")]
    assert "No instances at latest Launch Template version 5 found" in messages
    assert any("--force" in message for message in messages)


def test_plan_force_overrides_block() -> None:
    result = ClassificationResult(to_unprotect=("A", "B"))

    plan = plan_protection_removal(result, force=True)

    assert plan.status is PlanStatus.FORCED
    assert plan.proceed
    assert plan.to_unprotect == ("A", "B")


def test_plan_ready_keeps_classification_order() -> None:
    result = ClassificationResult(
        latest_ids=("L",), to_unprotect=("C", "A", "B"), stale_unprotected=("S",)
    )

    plan = plan_protection_removal(result)

    assert plan.status is PlanStatus.READY
    assert plan.to_unprotect == ("C", "A", "B")
    assert plan.stale_unprotected == ("S",)
    assert plan.latest_ids == ("L",)


def test_action_plan_rejects_overlapping_buckets() -> None:
    with pytest.raises(ValueError, match="i-1"):
        ActionPlan(
            to_unprotect=("i-1",),
            stale_unprotected=("i-1",),
            latest_ids=(),
            proceed=True,
            status=PlanStatus.READY,
        )


def test_plan_writes_to_callers_empty_stream() -> None:
    """A fresh stream passed in by the caller is the one that receives advisories."""

    stream = AdvisoryStream()

    plan_protection_removal(ClassificationResult(to_unprotect=("A",)), stream=stream)

    assert len(stream) > 0
    assert stream.records[0].severity == "WARN"
