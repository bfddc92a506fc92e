"""DecisionRules — thresholds, confidence and explanation for a ranked list."""

from __future__ import annotations

from dataclasses import dataclass

from assignment_engine.domain.value_objects.engine_config import DecisionThresholds
from assignment_engine.domain.value_objects.enums import DecisionType, TerminalState
from assignment_engine.domain.value_objects.score_breakdown import ScoreBreakdown


@dataclass(frozen=True)
class ThresholdOutcome:
    decision_type: DecisionType | None
    terminal_state: TerminalState | None


def apply_thresholds(top_score: float, thresholds: DecisionThresholds) -> ThresholdOutcome:
    """Both lower bounds are inclusive."""
    if top_score >= thresholds.auto_assign:
        return ThresholdOutcome(DecisionType.AUTO_ASSIGNED, None)
    if top_score >= thresholds.suggest:
        return ThresholdOutcome(DecisionType.SUGGESTED, None)
    return ThresholdOutcome(None, TerminalState.NO_CONFIDENT_MATCH)


def calculate_confidence(ranked: tuple[ScoreBreakdown, ...] | list[ScoreBreakdown]) -> float:
    """Confidence in the top pick, from its score and its lead over the runner-up."""
    if not ranked:
        return 0.0

    top = ranked[0].total
    if top >= 0.8:
        if len(ranked) == 1:
            return 0.95
        separation = top - ranked[1].total
        if separation >= 0.2:
            return 0.9
        if separation >= 0.1:
            return 0.8
        return 0.7

    if top >= 0.6:
        return 0.6
    return 0.4


def explain_assignment(score: ScoreBreakdown) -> str:
    reasons = []
    if score.skill >= 0.8:
        reasons.append("excellent skill match")
    if score.workload >= 0.8:
        reasons.append("optimal workload balance")
    if score.level >= 0.9:
        reasons.append("appropriate expertise level")
    if score.location == 1.0:
        reasons.append("location requirements met")
    if score.vip == 1.0:
        reasons.append("VIP specialist")

    if reasons:
        return f"Selected due to {', '.join(reasons)}"
    return "Best overall match based on scoring criteria"
