"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import httpx
from fastapi import Depends

from assignment_engine.adapters.config_store.json_file_store import JsonFileConfigStore
from assignment_engine.adapters.memory.decision_log import InMemoryDecisionLog
from assignment_engine.adapters.memory.snapshot_repo import InMemoryAgentSnapshotRepository
from assignment_engine.adapters.upstream.rate_limit_state import RateLimitState
from assignment_engine.adapters.upstream.resilient_client import ResilientSyncClient
from assignment_engine.adapters.upstream.ticketing_adapter import HttpTicketingAdapter
from assignment_engine.application.config_provider import EngineConfigProvider
from assignment_engine.application.ports.agent_snapshot_repo import AgentSnapshotRepository
from assignment_engine.application.ports.decision_sink import DecisionSink
from assignment_engine.application.ports.ticketing_port import TicketingPort
from assignment_engine.application.use_cases.decide_assignment import (
    DecideAssignmentUseCase,
    OverrideAssignmentUseCase,
)
from assignment_engine.application.use_cases.push_assignment import PushAssignmentUseCase
from assignment_engine.application.use_cases.sync_snapshot import SyncSnapshotUseCase
from assignment_engine.config import settings

# Process-wide singletons: one snapshot, one decision log, one upstream connection
_config_provider = EngineConfigProvider(JsonFileConfigStore(settings.engine_config_path))
_snapshot_repo = InMemoryAgentSnapshotRepository()
_decision_log = InMemoryDecisionLog()
_rate_limit = RateLimitState()

_http_client = httpx.AsyncClient(
    base_url=settings.ticketing_base_url,
    auth=(settings.ticketing_api_key, "X"),
    timeout=settings.ticketing_timeout,
    headers={"Content-Type": "application/json"},
)
_resilient_client = ResilientSyncClient(_rate_limit, retry=lambda: _config_provider.current().retry)
_ticketing = HttpTicketingAdapter(_http_client, _resilient_client)


def get_config_provider() -> EngineConfigProvider:
    return _config_provider


def get_snapshot_repo() -> AgentSnapshotRepository:
    return _snapshot_repo


def get_decision_sink() -> DecisionSink:
    return _decision_log


def get_rate_limit_state() -> RateLimitState:
    return _rate_limit


def get_ticketing() -> TicketingPort:
    return _ticketing


def get_decide_uc(
    snapshot_repo: AgentSnapshotRepository = Depends(get_snapshot_repo),
    decision_sink: DecisionSink = Depends(get_decision_sink),
    config_provider: EngineConfigProvider = Depends(get_config_provider),
    ticketing: TicketingPort = Depends(get_ticketing),
) -> DecideAssignmentUseCase:
    return DecideAssignmentUseCase(snapshot_repo, decision_sink, config_provider, ticketing=ticketing)


def get_override_uc(
    snapshot_repo: AgentSnapshotRepository = Depends(get_snapshot_repo),
    decision_sink: DecisionSink = Depends(get_decision_sink),
) -> OverrideAssignmentUseCase:
    return OverrideAssignmentUseCase(snapshot_repo, decision_sink)


def get_sync_uc(
    ticketing: TicketingPort = Depends(get_ticketing),
    snapshot_repo: AgentSnapshotRepository = Depends(get_snapshot_repo),
    config_provider: EngineConfigProvider = Depends(get_config_provider),
) -> SyncSnapshotUseCase:
    return SyncSnapshotUseCase(ticketing, snapshot_repo, config_provider)


def get_push_uc(ticketing: TicketingPort = Depends(get_ticketing)) -> PushAssignmentUseCase:
    return PushAssignmentUseCase(ticketing, enabled=settings.push_assignments)


async def close_upstream() -> None:
    await _http_client.aclose()
