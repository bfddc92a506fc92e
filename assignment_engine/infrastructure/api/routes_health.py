"""Health check endpoint."""

from fastapi import APIRouter, Depends

from assignment_engine.adapters.upstream.rate_limit_state import RateLimitState
from assignment_engine.application.config_provider import EngineConfigProvider
from assignment_engine.application.ports.agent_snapshot_repo import AgentSnapshotRepository
from assignment_engine.application.use_cases.decide_assignment import is_stale, utcnow
from assignment_engine.infrastructure.api.dependencies import (
    get_config_provider,
    get_rate_limit_state,
    get_snapshot_repo,
)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    snapshot_repo: AgentSnapshotRepository = Depends(get_snapshot_repo),
    config_provider: EngineConfigProvider = Depends(get_config_provider),
    rate_limit: RateLimitState = Depends(get_rate_limit_state),
):
    """Report agent-data freshness, config state and upstream quota."""
    config = config_provider.current()
    agents, last_sync = await snapshot_repo.agent_pool()
    stale = is_stale(last_sync, utcnow(), config.freshness_window_seconds)

    return {
        "status": "degraded" if stale else "ok",
        "agent_data": {
            "last_sync": last_sync.isoformat() if last_sync else None,
            "stale": stale,
            "agents": len(agents),
        },
        "config_loaded": config_provider.loaded,
        "rate_limit": rate_limit.status().to_dict(),
        "service": "Ticket Assignment Engine",
    }
