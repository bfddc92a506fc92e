"""Scoring endpoints — what-if simulation and per-agent workload."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from assignment_engine.application.config_provider import EngineConfigProvider
from assignment_engine.application.ports.agent_snapshot_repo import AgentSnapshotRepository
from assignment_engine.application.use_cases.decide_assignment import DecideAssignmentUseCase
from assignment_engine.domain.policies.decision_rules import apply_thresholds, calculate_confidence
from assignment_engine.domain.policies.workload import bucket_for_age, compute_weighted_load
from assignment_engine.domain.policies.scoring import workload_ceiling, workload_score
from assignment_engine.infrastructure.api.dependencies import (
    get_config_provider,
    get_decide_uc,
    get_snapshot_repo,
)
from assignment_engine.infrastructure.api.schemas import TicketPayload

router = APIRouter(tags=["scoring"])


@router.post("/scoring/simulate")
async def simulate(
    body: TicketPayload,
    use_case: DecideAssignmentUseCase = Depends(get_decide_uc),
    config_provider: EngineConfigProvider = Depends(get_config_provider),
):
    """Rank the current pool for a hypothetical ticket. Nothing is recorded."""
    evaluation = await use_case.preview(body.to_domain())
    thresholds = config_provider.current().thresholds

    outcome = None
    if evaluation.ranked:
        result = apply_thresholds(evaluation.ranked[0].total, thresholds)
        outcome = (result.decision_type or result.terminal_state).value

    return {
        "ticket_id": body.id,
        "pool_size": evaluation.pool_size,
        "eligible": len(evaluation.eligibility.eligible),
        "rejections": {
            agent_id: reason.value for agent_id, reason in evaluation.eligibility.rejections.items()
        },
        "ranked": [s.to_dict() for s in evaluation.ranked],
        "projected_outcome": outcome or "NO_ELIGIBLE_AGENT",
        "confidence": calculate_confidence(evaluation.ranked),
    }


@router.get("/agents/{agent_id}/workload")
async def agent_workload(
    agent_id: str,
    snapshot_repo: AgentSnapshotRepository = Depends(get_snapshot_repo),
    config_provider: EngineConfigProvider = Depends(get_config_provider),
):
    agent = await snapshot_repo.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail=f"Agent {agent_id} not found")

    config = config_provider.current()
    load = compute_weighted_load(agent, config.workload_decay)

    return {
        "agent_id": agent.id,
        "name": agent.name,
        "weighted_load": load.to_dict(),
        "ceiling": workload_ceiling(load.total, config.workload_ceiling),
        "workload_score": round(workload_score(load.total, config.workload_ceiling), 6),
        "open_tickets": [
            {
                "ticket_id": t.ticket_id,
                "age_days": t.age_days,
                "bucket": bucket_for_age(t.age_days, config.workload_decay).value,
            }
            for t in agent.open_tickets
        ],
    }
