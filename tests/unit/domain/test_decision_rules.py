"""Tests for DecisionRules — thresholds, confidence, explanations."""

import pytest

from assignment_engine.domain.policies.decision_rules import (
    apply_thresholds,
    calculate_confidence,
    explain_assignment,
)
from assignment_engine.domain.value_objects.engine_config import DecisionThresholds
from assignment_engine.domain.value_objects.enums import DecisionType, TerminalState
from assignment_engine.domain.value_objects.score_breakdown import ScoreBreakdown

THRESHOLDS = DecisionThresholds(auto_assign=0.7, suggest=0.5)


def _score(total, skill=0.0, level=0.0, workload=0.0, location=0.0, vip=0.0):
    return ScoreBreakdown(
        agent_id="a", skill=skill, level=level, workload=workload, location=location, vip=vip,
        total=total, weighted_load=0.0,
    )


# ─── Thresholds ─────────────────────────────────────────────────────


def test_score_exactly_at_auto_threshold_auto_assigns():
    assert apply_thresholds(0.7, THRESHOLDS).decision_type == DecisionType.AUTO_ASSIGNED


def test_score_exactly_at_suggest_threshold_suggests():
    assert apply_thresholds(0.5, THRESHOLDS).decision_type == DecisionType.SUGGESTED


def test_score_between_thresholds_suggests():
    outcome = apply_thresholds(0.69, THRESHOLDS)
    assert outcome.decision_type == DecisionType.SUGGESTED
    assert outcome.terminal_state is None


def test_score_below_suggest_is_no_confident_match():
    outcome = apply_thresholds(0.49, THRESHOLDS)
    assert outcome.decision_type is None
    assert outcome.terminal_state == TerminalState.NO_CONFIDENT_MATCH


# ─── Confidence ─────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "totals,expected",
    [
        ([], 0.0),
        ([0.85], 0.95),
        ([0.9, 0.6], 0.9),
        ([0.9, 0.78], 0.8),
        ([0.9, 0.85], 0.7),
        ([0.65, 0.2], 0.6),
        ([0.3], 0.4),
    ],
)
def test_confidence(totals, expected):
    assert calculate_confidence([_score(t) for t in totals]) == expected


# ─── Explanations ───────────────────────────────────────────────────


def test_explanation_lists_strong_factors():
    reason = explain_assignment(_score(0.9, skill=1.0, workload=0.9, level=1.0, location=1.0))
    assert reason == (
        "Selected due to excellent skill match, optimal workload balance, "
        "appropriate expertise level, location requirements met"
    )


def test_explanation_mentions_vip_specialist():
    assert "VIP specialist" in explain_assignment(_score(0.6, vip=1.0))


def test_explanation_fallback():
    assert explain_assignment(_score(0.55, skill=0.5)) == "Best overall match based on scoring criteria"
