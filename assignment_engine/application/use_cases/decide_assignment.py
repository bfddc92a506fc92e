"""DecideAssignmentUseCase — eligibility → scoring → ranking → thresholds.

OverrideAssignmentUseCase — operator replaces an earlier decision.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from assignment_engine.application.config_provider import EngineConfigProvider
from assignment_engine.application.ports.agent_snapshot_repo import AgentSnapshotRepository
from assignment_engine.application.ports.decision_sink import DecisionSink
from assignment_engine.application.ports.ticketing_port import TicketingPort
from assignment_engine.domain.entities.agent import Agent
from assignment_engine.domain.entities.decision import Decision
from assignment_engine.domain.entities.ticket import Ticket
from assignment_engine.domain.exceptions import (
    AgentNotFoundError,
    DecisionNotFoundError,
    TicketNotFoundError,
)
from assignment_engine.domain.policies.decision_rules import (
    apply_thresholds,
    calculate_confidence,
    explain_assignment,
)
from assignment_engine.domain.policies.eligibility import EligibilityResult, filter_eligible
from assignment_engine.domain.policies.ranking import rank_candidates
from assignment_engine.domain.policies.scoring import score_agent
from assignment_engine.domain.value_objects.engine_config import EngineConfig
from assignment_engine.domain.value_objects.enums import DecisionType, TerminalState
from assignment_engine.domain.value_objects.score_breakdown import ScoreBreakdown

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


def is_stale(last_sync: datetime | None, now: datetime, window_seconds: int) -> bool:
    if last_sync is None:
        return True
    return (now - last_sync).total_seconds() > window_seconds


@dataclass(frozen=True)
class Evaluation:
    """Eligibility and ranking for one ticket against one snapshot."""

    pool_size: int
    eligibility: EligibilityResult
    ranked: tuple[ScoreBreakdown, ...]


def evaluate(ticket: Ticket, agents: tuple[Agent, ...], config: EngineConfig, now: datetime) -> Evaluation:
    eligibility = filter_eligible(ticket, agents, now)
    # Each score depends only on its own agent; ordering happens after all are done
    scores = [score_agent(ticket, agent, config) for agent in eligibility.eligible]
    return Evaluation(
        pool_size=len(agents),
        eligibility=eligibility,
        ranked=rank_candidates(scores, config.tie_epsilon),
    )


class DecideAssignmentUseCase:
    """Produces exactly one Decision per call; never raises for business outcomes."""

    def __init__(
        self,
        snapshot_repo: AgentSnapshotRepository,
        decision_sink: DecisionSink,
        config_provider: EngineConfigProvider,
        clock: Callable[[], datetime] = utcnow,
        ticketing: TicketingPort | None = None,
    ):
        self._snapshot = snapshot_repo
        self._sink = decision_sink
        self._config = config_provider
        self._clock = clock
        self._ticketing = ticketing

    async def execute(self, ticket: Ticket) -> Decision:
        config = self._config.current()
        now = self._clock()

        try:
            pool, last_sync = await self._snapshot.agent_pool()
            agents = tuple(pool)
        except Exception:
            logger.exception("Ticket %s: agent snapshot unavailable, deciding on empty pool", ticket.id)
            agents, last_sync = (), None

        stale = is_stale(last_sync, now, config.freshness_window_seconds)
        if stale:
            logger.warning(
                "Ticket %s: agent data is stale (last sync: %s, window: %ds)",
                ticket.id, last_sync.isoformat() if last_sync else "never",
                config.freshness_window_seconds,
            )

        evaluation = evaluate(ticket, agents, config, now)

        if evaluation.eligibility.is_empty:
            decision = self._no_eligible_agent(ticket, evaluation, stale, now)
        else:
            decision = self._from_ranking(ticket, evaluation, config, stale, now)

        logger.info(
            "Ticket %s: %s → %s (score=%s, eligible=%d/%d)",
            ticket.id,
            decision.decision_type.value if decision.decision_type else decision.terminal_state.value,
            decision.chosen_agent_id or "-",
            f"{decision.score.total:.3f}" if decision.score else "-",
            len(evaluation.eligibility.eligible), evaluation.pool_size,
        )

        await self._record(decision)
        return decision

    async def execute_by_id(self, ticket_id: str) -> Decision:
        """Decide for a ticket from the snapshot, or upstream if it arrived after the last sync.

        Raises:
            TicketNotFoundError: if neither the snapshot nor upstream knows the ticket.
            UpstreamUnavailableError, UpstreamRateLimitedError: if the upstream lookup fails.
        """
        ticket = await self._snapshot.get_ticket(ticket_id)
        if ticket is None and self._ticketing is not None:
            logger.info("Ticket %s not in snapshot, fetching from upstream", ticket_id)
            ticket = await self._ticketing.fetch_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found")
        return await self.execute(ticket)

    async def preview(self, ticket: Ticket) -> Evaluation:
        """What-if ranking against the current snapshot; nothing is recorded."""
        agents = tuple(await self._snapshot.list_available_agents())
        return evaluate(ticket, agents, self._config.current(), self._clock())

    def _no_eligible_agent(
        self, ticket: Ticket, evaluation: Evaluation, stale: bool, now: datetime
    ) -> Decision:
        counts = evaluation.eligibility.reason_counts()
        detail = ", ".join(f"{reason}={n}" for reason, n in sorted(counts.items()))
        return Decision(
            id=_new_id(),
            ticket_id=ticket.id,
            created_at=now,
            decision_type=None,
            terminal_state=TerminalState.NO_ELIGIBLE_AGENT,
            rejections=dict(evaluation.eligibility.rejections),
            reason=f"No eligible agent among {evaluation.pool_size} ({detail or 'empty pool'})",
            stale_data=stale,
        )

    def _from_ranking(
        self,
        ticket: Ticket,
        evaluation: Evaluation,
        config: EngineConfig,
        stale: bool,
        now: datetime,
    ) -> Decision:
        ranked = evaluation.ranked
        top = ranked[0]
        outcome = apply_thresholds(top.total, config.thresholds)
        n = config.alternatives_count

        if outcome.terminal_state is not None:
            return Decision(
                id=_new_id(),
                ticket_id=ticket.id,
                created_at=now,
                decision_type=None,
                terminal_state=outcome.terminal_state,
                alternatives=ranked[:n],
                ranked=ranked,
                rejections=dict(evaluation.eligibility.rejections),
                confidence=calculate_confidence(ranked),
                reason=(
                    f"Top score {top.total:.2f} is below the suggest threshold "
                    f"{config.thresholds.suggest:.2f}; needs manual triage"
                ),
                stale_data=stale,
            )

        decision_type = outcome.decision_type
        notes = [explain_assignment(top)]
        if decision_type == DecisionType.AUTO_ASSIGNED and not config.auto_assign_enabled:
            decision_type = DecisionType.SUGGESTED
            notes.append("auto-assignment is disabled")
        if decision_type == DecisionType.AUTO_ASSIGNED and stale:
            decision_type = DecisionType.SUGGESTED
            notes.append("downgraded to suggestion because agent data is stale")

        return Decision(
            id=_new_id(),
            ticket_id=ticket.id,
            created_at=now,
            decision_type=decision_type,
            chosen_agent_id=top.agent_id,
            score=top,
            alternatives=ranked[1:1 + n],
            ranked=ranked,
            rejections=dict(evaluation.eligibility.rejections),
            confidence=calculate_confidence(ranked),
            reason="; ".join(notes),
            stale_data=stale,
        )

    async def _record(self, decision: Decision) -> None:
        try:
            await self._sink.record(decision)
        except Exception:
            logger.exception("Failed to record decision %s for ticket %s", decision.id, decision.ticket_id)


class OverrideAssignmentUseCase:
    """Operator-chosen assignment that bypasses scoring but keeps the audit trail."""

    def __init__(
        self,
        snapshot_repo: AgentSnapshotRepository,
        decision_sink: DecisionSink,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._snapshot = snapshot_repo
        self._sink = decision_sink
        self._clock = clock

    async def execute(
        self,
        ticket_id: str,
        agent_id: str,
        reason: str,
        operator: str | None = None,
    ) -> Decision:
        """Record a MANUAL_OVERRIDE that references the latest decision for the ticket.

        Raises:
            ValueError: if *reason* is blank.
            DecisionNotFoundError: if the ticket has never been decided.
            AgentNotFoundError: if the agent is not in the snapshot.
        """
        if not reason or not reason.strip():
            raise ValueError("Override reason must not be empty")

        previous = await self._sink.latest_for_ticket(ticket_id)
        if previous is None:
            raise DecisionNotFoundError(f"No decision recorded for ticket {ticket_id}")

        agent = await self._snapshot.get_agent(agent_id)
        if agent is None:
            raise AgentNotFoundError(f"Agent {agent_id} not found")

        original_score = next((s for s in previous.ranked if s.agent_id == agent_id), None)
        decision = Decision(
            id=_new_id(),
            ticket_id=ticket_id,
            created_at=self._clock(),
            decision_type=DecisionType.MANUAL_OVERRIDE,
            chosen_agent_id=agent.id,
            score=original_score,
            alternatives=previous.alternatives,
            ranked=previous.ranked,
            rejections=dict(previous.rejections),
            confidence=previous.confidence,
            reason=f"Manual override: {reason.strip()}",
            stale_data=previous.stale_data,
            previous_decision_id=previous.id,
            overridden_by=operator,
            override_reason=reason.strip(),
        )
        logger.info(
            "Ticket %s: manual override → %s (replaces %s, by %s)",
            ticket_id, agent.id, previous.id, operator or "unknown",
        )

        try:
            await self._sink.record(decision)
        except Exception:
            logger.exception("Failed to record override %s for ticket %s", decision.id, ticket_id)
        return decision
