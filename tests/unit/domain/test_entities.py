"""Tests for domain entities."""

from datetime import datetime, timezone

from assignment_engine.domain.entities.agent import Leave
from assignment_engine.domain.entities.decision import Decision
from assignment_engine.domain.value_objects.enums import (
    DecisionType,
    LeaveType,
    RejectionReason,
    SupportMode,
    TerminalState,
)
from assignment_engine.domain.value_objects.location import Location
from assignment_engine.domain.value_objects.score_breakdown import ScoreBreakdown


def test_agent_ticket_ages(make_agent):
    agent = make_agent(ages=[0, 4, 20])
    assert agent.ticket_ages == [0, 4, 20]


def test_agent_handles_vip(make_agent):
    assert not make_agent().handles_vip()
    assert make_agent(vip_capable=True).handles_vip()
    assert make_agent(vip_specialist=True).handles_vip()


def test_agent_on_leave_uses_leave_window(make_agent, now):
    agent = make_agent(leave=Leave(LeaveType.VACATION, end=datetime(2025, 1, 1, tzinfo=timezone.utc)))
    assert not agent.is_on_leave(now)


def test_agent_without_location_supports_nothing_onsite(make_agent):
    assert not make_agent().supports_mode(SupportMode.ONSITE)


def test_location_match_ignores_case_and_spacing():
    a = Location("Vancouver ", "America/Vancouver")
    b = Location("vancouver", "America/Vancouver")
    assert a.matches(b)


def test_location_defaults_to_remote_only():
    loc = Location("HQ", "UTC")
    assert loc.supports(SupportMode.REMOTE)
    assert not loc.supports(SupportMode.ONSITE)


def test_ticket_requires_skills(make_ticket):
    assert make_ticket(skills=["vpn"]).requires_skills()
    assert not make_ticket().requires_skills()


def test_decision_to_dict_serializes_everything(now):
    score = ScoreBreakdown("a1", 1.0, 1.0, 0.5, 1.0, 0.0, 0.775, 6.0, {"skill": 0.3})
    d = Decision(
        id="d1",
        ticket_id="t1",
        created_at=now,
        decision_type=DecisionType.SUGGESTED,
        chosen_agent_id="a1",
        score=score,
        ranked=(score,),
        rejections={"a2": RejectionReason.ON_LEAVE},
        confidence=0.6,
        reason="Selected due to excellent skill match",
    )

    data = d.to_dict()

    assert data["decision_type"] == "SUGGESTED"
    assert data["terminal_state"] is None
    assert data["score"]["agent_id"] == "a1"
    assert data["ranked"][0]["factors"]["workload"] == 0.5
    assert data["rejections"] == {"a2": "ON_LEAVE"}
    assert data["created_at"] == now.isoformat()
    assert d.is_assigned


def test_terminal_decision_has_no_agent(now):
    d = Decision(
        id="d2", ticket_id="t1", created_at=now, decision_type=None,
        terminal_state=TerminalState.NO_ELIGIBLE_AGENT,
    )
    assert not d.is_assigned
    assert d.to_dict()["terminal_state"] == "NO_ELIGIBLE_AGENT"
    assert d.to_dict()["ranked"] == []
