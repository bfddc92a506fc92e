"""Decision entity — the immutable record of how a ticket was (or was not) routed."""

from dataclasses import dataclass, field
from datetime import datetime

from assignment_engine.domain.value_objects.enums import (
    DecisionType,
    RejectionReason,
    TerminalState,
)
from assignment_engine.domain.value_objects.score_breakdown import ScoreBreakdown


@dataclass(frozen=True)
class Decision:
    id: str
    ticket_id: str
    created_at: datetime
    decision_type: DecisionType | None
    terminal_state: TerminalState | None = None
    chosen_agent_id: str | None = None
    score: ScoreBreakdown | None = None
    alternatives: tuple[ScoreBreakdown, ...] = ()
    ranked: tuple[ScoreBreakdown, ...] = ()
    rejections: dict[str, RejectionReason] = field(default_factory=dict, hash=False)
    confidence: float = 0.0
    reason: str = ""
    stale_data: bool = False
    previous_decision_id: str | None = None
    overridden_by: str | None = None
    override_reason: str | None = None

    @property
    def is_assigned(self) -> bool:
        return self.chosen_agent_id is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ticket_id": self.ticket_id,
            "created_at": self.created_at.isoformat(),
            "decision_type": self.decision_type.value if self.decision_type else None,
            "terminal_state": self.terminal_state.value if self.terminal_state else None,
            "chosen_agent_id": self.chosen_agent_id,
            "score": self.score.to_dict() if self.score else None,
            "alternatives": [s.to_dict() for s in self.alternatives],
            "ranked": [s.to_dict() for s in self.ranked],
            "rejections": {agent_id: r.value for agent_id, r in self.rejections.items()},
            "confidence": self.confidence,
            "reason": self.reason,
            "stale_data": self.stale_data,
            "previous_decision_id": self.previous_decision_id,
            "overridden_by": self.overridden_by,
            "override_reason": self.override_reason,
        }
