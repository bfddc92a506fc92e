"""ScoringPolicy — five-factor match score for one (ticket, agent) pair.

All functions are pure: same ticket, agent and config give a bit-identical
ScoreBreakdown.
"""

from __future__ import annotations

import math

from assignment_engine.domain.entities.agent import Agent
from assignment_engine.domain.entities.ticket import Ticket
from assignment_engine.domain.policies.workload import compute_weighted_load
from assignment_engine.domain.value_objects.engine_config import (
    EngineConfig,
    LocationCredit,
    WorkloadCeiling,
)
from assignment_engine.domain.value_objects.score_breakdown import ScoreBreakdown


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def skill_score(agent: Agent, ticket: Ticket) -> float:
    if not ticket.required_skills:
        return 1.0
    matched = len(ticket.required_skills & agent.skills)
    return matched / len(ticket.required_skills)


def level_score(agent: Agent, ticket: Ticket, decay: tuple[float, ...]) -> float:
    distance = abs(agent.level.rank - ticket.required_level.rank)
    if not decay:
        return 1.0 if distance == 0 else 0.0
    return _clamp(decay[min(distance, len(decay) - 1)])


def workload_ceiling(weighted_load: float, ceiling: WorkloadCeiling) -> float:
    """Per-agent capacity ceiling; the dynamic form scales with the agent's own load."""
    if ceiling.fixed is not None:
        return ceiling.fixed
    return max(ceiling.floor, math.ceil(weighted_load * ceiling.factor))


def workload_score(weighted_load: float, ceiling: WorkloadCeiling) -> float:
    limit = workload_ceiling(weighted_load, ceiling)
    if limit <= 0:
        return 0.0
    return max(0.0, 1.0 - weighted_load / limit)


def location_score(agent: Agent, ticket: Ticket, credit: LocationCredit) -> float:
    if ticket.location is None:
        return 1.0

    score = 0.0
    if agent.location is not None:
        if agent.location.matches(ticket.location):
            score = 1.0
        elif agent.location.same_timezone(ticket.location):
            score = credit.same_timezone

    if agent.is_remote:
        score = max(score, credit.remote_floor)
    return score


def vip_score(agent: Agent, ticket: Ticket) -> float:
    if not ticket.is_vip:
        return 0.0
    if agent.vip_specialist:
        return 1.0
    if agent.vip_capable:
        return 0.5
    return 0.0


def score_agent(ticket: Ticket, agent: Agent, config: EngineConfig) -> ScoreBreakdown:
    """Score *agent* for *ticket* and keep every factor for explainability.

    Weights in ``config`` are already normalized to sum to 1.0.
    """
    load = compute_weighted_load(agent, config.workload_decay).total
    weights = config.weights

    skill = skill_score(agent, ticket)
    level = level_score(agent, ticket, config.level_decay)
    workload = workload_score(load, config.workload_ceiling)
    location = location_score(agent, ticket, config.location)
    vip = vip_score(agent, ticket)

    total = (
        skill * weights.skill
        + level * weights.level
        + workload * weights.workload
        + location * weights.location
        + vip * weights.vip
    )

    return ScoreBreakdown(
        agent_id=agent.id,
        skill=skill,
        level=level,
        workload=workload,
        location=location,
        vip=vip,
        total=_clamp(total),
        weighted_load=load,
        weights=weights.as_dict(),
    )
