"""EligibilityPolicy — which agents may take a ticket at all.

Checks run in a fixed order and stop at the first failure, so every rejected
agent carries exactly one reason code:

  1. available and not on a blocking leave
  2. location advertises the ticket's support mode (onsite / remote)
  3. level >= required level (never substituted downwards)
  4. at least one required skill, when the ticket requires any
  5. VIP-capable, when the ticket is VIP

An empty eligible list is a normal result, not an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from assignment_engine.domain.entities.agent import Agent
from assignment_engine.domain.entities.ticket import Ticket
from assignment_engine.domain.value_objects.enums import RejectionReason


@dataclass(frozen=True)
class EligibilityResult:
    eligible: tuple[Agent, ...]
    rejections: dict[str, RejectionReason] = field(default_factory=dict, hash=False)

    @property
    def is_empty(self) -> bool:
        return not self.eligible

    def reason_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for reason in self.rejections.values():
            counts[reason.value] = counts.get(reason.value, 0) + 1
        return counts


def check_agent(agent: Agent, ticket: Ticket, now: datetime) -> RejectionReason | None:
    """Return the first failing reason for *agent*, or None if eligible."""
    if not agent.is_available:
        return RejectionReason.UNAVAILABLE
    if agent.is_on_leave(now):
        return RejectionReason.ON_LEAVE

    if ticket.support_mode is not None and not agent.supports_mode(ticket.support_mode):
        return RejectionReason.SUPPORT_MODE_MISMATCH

    if agent.level.rank < ticket.required_level.rank:
        return RejectionReason.LEVEL_TOO_LOW

    if ticket.requires_skills() and not (agent.skills & ticket.required_skills):
        return RejectionReason.SKILL_MISMATCH

    if ticket.is_vip and not agent.handles_vip():
        return RejectionReason.NOT_VIP_CAPABLE

    return None


def filter_eligible(ticket: Ticket, agents: list[Agent] | tuple[Agent, ...], now: datetime) -> EligibilityResult:
    """Reduce the pool to eligible agents, preserving input order."""
    eligible: list[Agent] = []
    rejections: dict[str, RejectionReason] = {}

    for agent in agents:
        reason = check_agent(agent, ticket, now)
        if reason is None:
            eligible.append(agent)
        else:
            rejections[agent.id] = reason

    return EligibilityResult(eligible=tuple(eligible), rejections=rejections)
