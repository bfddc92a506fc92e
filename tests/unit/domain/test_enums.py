"""Tests for domain enums."""

from assignment_engine.domain.value_objects.enums import (
    AgeBucket,
    LeaveType,
    RejectionReason,
    SupportLevel,
)


def test_support_level_rank_order():
    assert SupportLevel.L1.rank < SupportLevel.L2.rank < SupportLevel.L3.rank


def test_support_level_from_value():
    assert SupportLevel("L2") is SupportLevel.L2


def test_leave_types_that_keep_agent_working():
    working = {t for t in LeaveType if not t.blocks_work}
    assert working == {LeaveType.WFH, LeaveType.SITE_VISIT, LeaveType.TRAINING}


def test_rejection_reason_count():
    assert len(RejectionReason) == 6


def test_age_bucket_values():
    assert [b.value for b in AgeBucket] == ["fresh", "recent", "stale", "abandoned"]
