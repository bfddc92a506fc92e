"""Tests for EligibilityPolicy — hard constraints and rejection reasons."""

from datetime import timedelta

from assignment_engine.domain.entities.agent import Leave
from assignment_engine.domain.policies.eligibility import check_agent, filter_eligible
from assignment_engine.domain.value_objects.enums import (
    LeaveStatus,
    LeaveType,
    RejectionReason,
    SupportLevel,
    SupportMode,
)
from assignment_engine.domain.value_objects.location import Location


def test_password_reset_in_vancouver(make_agent, make_ticket, vancouver, now):
    ticket = make_ticket(skills=["password_reset"], location=vancouver)
    a = make_agent("A", skills=["password_reset"], ages=[0, 0], location=vancouver)
    b = make_agent("B", skills=[])

    result = filter_eligible(ticket, [a, b], now)

    assert [agent.id for agent in result.eligible] == ["A"]
    assert result.rejections == {"B": RejectionReason.SKILL_MISMATCH}


def test_result_partitions_pool_and_keeps_order(make_agent, make_ticket, now):
    ticket = make_ticket(skills=["vpn"], level=SupportLevel.L2)
    pool = [
        make_agent("a1", level=SupportLevel.L2, skills=["vpn"]),
        make_agent("a2", level=SupportLevel.L1, skills=["vpn"]),
        make_agent("a3", level=SupportLevel.L3, skills=["vpn", "printers"]),
        make_agent("a4", level=SupportLevel.L3, skills=["printers"]),
        make_agent("a5", level=SupportLevel.L2, skills=["vpn"], is_available=False),
    ]

    result = filter_eligible(ticket, pool, now)

    eligible_ids = [a.id for a in result.eligible]
    assert eligible_ids == ["a1", "a3"]
    assert set(eligible_ids).isdisjoint(result.rejections)
    assert set(eligible_ids) | set(result.rejections) == {a.id for a in pool}
    assert all(result.rejections.values())


def test_empty_pool_is_not_an_error(make_ticket, now):
    result = filter_eligible(make_ticket(), [], now)
    assert result.is_empty
    assert result.rejections == {}


def test_reason_counts(make_agent, make_ticket, now):
    ticket = make_ticket(skills=["sso"])
    pool = [make_agent("a1"), make_agent("a2"), make_agent("a3", is_available=False)]
    assert filter_eligible(ticket, pool, now).reason_counts() == {
        "SKILL_MISMATCH": 2,
        "UNAVAILABLE": 1,
    }


# ─── Availability and leave ─────────────────────────────────────────


def test_unavailable_agent_rejected(make_agent, make_ticket, now):
    agent = make_agent(is_available=False)
    assert check_agent(agent, make_ticket(), now) == RejectionReason.UNAVAILABLE


def test_active_vacation_rejected(make_agent, make_ticket, now):
    agent = make_agent(leave=Leave(LeaveType.VACATION, end=now + timedelta(days=2)))
    assert check_agent(agent, make_ticket(), now) == RejectionReason.ON_LEAVE


def test_open_ended_sick_day_rejected(make_agent, make_ticket, now):
    agent = make_agent(leave=Leave(LeaveType.SICK_DAY))
    assert check_agent(agent, make_ticket(), now) == RejectionReason.ON_LEAVE


def test_leave_ending_now_still_blocks(make_agent, make_ticket, now):
    agent = make_agent(leave=Leave(LeaveType.PTO, end=now))
    assert check_agent(agent, make_ticket(), now) == RejectionReason.ON_LEAVE


def test_finished_leave_does_not_block(make_agent, make_ticket, now):
    agent = make_agent(leave=Leave(LeaveType.VACATION, end=now - timedelta(seconds=1)))
    assert check_agent(agent, make_ticket(), now) is None


def test_future_leave_does_not_block(make_agent, make_ticket, now):
    leave = Leave(LeaveType.VACATION, start=now + timedelta(days=10), end=now + timedelta(days=17))
    assert check_agent(make_agent(leave=leave), make_ticket(), now) is None


def test_leave_starting_now_blocks(make_agent, make_ticket, now):
    leave = Leave(LeaveType.VACATION, start=now, end=now + timedelta(days=7))
    assert check_agent(make_agent(leave=leave), make_ticket(), now) == RejectionReason.ON_LEAVE


def test_cancelled_leave_does_not_block(make_agent, make_ticket, now):
    agent = make_agent(leave=Leave(LeaveType.VACATION, status=LeaveStatus.CANCELLED))
    assert check_agent(agent, make_ticket(), now) is None


def test_working_leave_types_keep_agent_assignable(make_agent, make_ticket, now):
    for leave_type in (LeaveType.WFH, LeaveType.SITE_VISIT, LeaveType.TRAINING):
        agent = make_agent(leave=Leave(leave_type))
        assert check_agent(agent, make_ticket(), now) is None, leave_type


def test_unavailable_reported_before_other_failures(make_agent, make_ticket, now):
    agent = make_agent(is_available=False, level=SupportLevel.L1)
    ticket = make_ticket(level=SupportLevel.L3, skills=["sap"], is_vip=True)
    assert check_agent(agent, ticket, now) == RejectionReason.UNAVAILABLE


# ─── Support mode ───────────────────────────────────────────────────


def test_onsite_ticket_needs_onsite_location(make_agent, make_ticket, seattle, vancouver, now):
    ticket = make_ticket(support_mode=SupportMode.ONSITE)
    assert check_agent(make_agent(location=seattle), ticket, now) == RejectionReason.SUPPORT_MODE_MISMATCH
    assert check_agent(make_agent(location=vancouver), ticket, now) is None


def test_remote_flag_covers_remote_tickets_without_location(make_agent, make_ticket, now):
    ticket = make_ticket(support_mode=SupportMode.REMOTE)
    assert check_agent(make_agent(is_remote=True), ticket, now) is None
    assert check_agent(make_agent(), ticket, now) == RejectionReason.SUPPORT_MODE_MISMATCH


def test_remote_flag_does_not_cover_onsite(make_agent, make_ticket, now):
    onsite_only = Location("Depot", "UTC", support_modes=frozenset({SupportMode.REMOTE}))
    agent = make_agent(is_remote=True, location=onsite_only)
    ticket = make_ticket(support_mode=SupportMode.ONSITE)
    assert check_agent(agent, ticket, now) == RejectionReason.SUPPORT_MODE_MISMATCH


def test_ticket_without_mode_skips_mode_check(make_agent, make_ticket, now):
    assert check_agent(make_agent(), make_ticket(), now) is None


# ─── Level, skills, VIP ─────────────────────────────────────────────


def test_level_never_substituted_downwards(make_agent, make_ticket, now):
    ticket = make_ticket(level=SupportLevel.L2)
    assert check_agent(make_agent(level=SupportLevel.L1), ticket, now) == RejectionReason.LEVEL_TOO_LOW
    assert check_agent(make_agent(level=SupportLevel.L2), ticket, now) is None
    assert check_agent(make_agent(level=SupportLevel.L3), ticket, now) is None


def test_one_overlapping_skill_is_enough(make_agent, make_ticket, now):
    ticket = make_ticket(skills=["vpn", "mfa"])
    assert check_agent(make_agent(skills=["mfa"]), ticket, now) is None


def test_ticket_without_skills_accepts_anyone(make_agent, make_ticket, now):
    assert check_agent(make_agent(skills=[]), make_ticket(skills=[]), now) is None


def test_vip_ticket_needs_vip_capable_agent(make_agent, make_ticket, now):
    ticket = make_ticket(is_vip=True)
    assert check_agent(make_agent(), ticket, now) == RejectionReason.NOT_VIP_CAPABLE
    assert check_agent(make_agent(vip_capable=True), ticket, now) is None
    assert check_agent(make_agent(vip_specialist=True), ticket, now) is None
