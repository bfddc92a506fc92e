"""Tests for SyncSnapshotUseCase with a fake ticketing port."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from assignment_engine.adapters.memory.snapshot_repo import InMemoryAgentSnapshotRepository
from assignment_engine.adapters.upstream.rate_limit_state import RateLimitState
from assignment_engine.adapters.upstream.resilient_client import ResilientSyncClient
from assignment_engine.adapters.upstream.ticketing_adapter import HttpTicketingAdapter
from assignment_engine.application.config_provider import EngineConfigProvider
from assignment_engine.application.ports.config_store import ConfigStore
from assignment_engine.application.ports.ticketing_port import TicketingPort
from assignment_engine.application.use_cases.sync_snapshot import SyncSnapshotUseCase
from assignment_engine.domain.exceptions import UpstreamRateLimitedError, UpstreamUnavailableError
from assignment_engine.domain.value_objects.engine_config import EngineConfig, WorkloadDecay

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeTicketing(TicketingPort):
    def __init__(self, agents=(), open_tickets=(), error: Exception | None = None):
        self.agents = list(agents)
        self.open_tickets = list(open_tickets)
        self.error = error
        self.assigned = []

    async def fetch_agents(self):
        if self.error:
            raise self.error
        return list(self.agents)

    async def fetch_open_tickets(self):
        return list(self.open_tickets)

    async def fetch_ticket(self, ticket_id):
        return next((t for t, _ in self.open_tickets if t.id == ticket_id), None)

    async def assign_ticket(self, ticket_id, agent_id):
        self.assigned.append((ticket_id, agent_id))


class StaticConfigStore(ConfigStore):
    async def load(self):
        return {}


def _sync(ticketing, repo, now, config=None):
    provider = EngineConfigProvider(StaticConfigStore(), initial=config or EngineConfig())
    return SyncSnapshotUseCase(ticketing, repo, provider, clock=lambda: now)


@pytest.mark.asyncio
async def test_sync_attaches_open_tickets_with_ages(make_agent, make_ticket, now):
    ticketing = FakeTicketing(
        agents=[make_agent("17"), make_agent("18")],
        open_tickets=[
            (make_ticket("100", created_at=now), "17"),
            (make_ticket("101", created_at=now - timedelta(days=7)), "17"),
            (make_ticket("102", created_at=now), None),
        ],
    )
    repo = InMemoryAgentSnapshotRepository()

    result = await _sync(ticketing, repo, now).execute()

    assert result.ok
    assert result.agents == 2
    assert result.open_tickets == 3
    assert result.synced_at == now
    agent = await repo.get_agent("17")
    assert {t.ticket_id: t.age_days for t in agent.open_tickets} == {"100": 0, "101": 5}
    assert (await repo.get_agent("18")).open_tickets == ()
    assert await repo.get_ticket("102") is not None
    assert await repo.last_successful_sync() == now


@pytest.mark.asyncio
async def test_sync_can_count_calendar_days(make_agent, make_ticket, now):
    ticketing = FakeTicketing(
        agents=[make_agent("17")],
        open_tickets=[(make_ticket("101", created_at=now - timedelta(days=7)), "17")],
    )
    repo = InMemoryAgentSnapshotRepository()
    config = EngineConfig(workload_decay=WorkloadDecay(count_business_days=False))

    await _sync(ticketing, repo, now, config).execute()

    assert (await repo.get_agent("17")).ticket_ages == [7]


@pytest.mark.asyncio
async def test_unknown_responders_are_counted(make_agent, make_ticket, now):
    ticketing = FakeTicketing(
        agents=[make_agent("17")],
        open_tickets=[(make_ticket("100", created_at=now), "99")],
    )

    result = await _sync(ticketing, InMemoryAgentSnapshotRepository(), now).execute()

    assert result.unmatched_tickets == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [UpstreamRateLimitedError("agents page 1", 6), UpstreamUnavailableError("GET /agents failed")],
)
async def test_failed_sync_keeps_previous_snapshot(make_agent, error, now):
    earlier = datetime(2025, 3, 12, 14, 0, tzinfo=timezone.utc)
    repo = InMemoryAgentSnapshotRepository([make_agent("17")], synced_at=earlier)

    result = await _sync(FakeTicketing(error=error), repo, now).execute()

    assert not result.ok
    assert result.error == str(error)
    assert result.synced_at == earlier
    assert await repo.last_successful_sync() == earlier
    assert [a.id for a in await repo.list_available_agents()] == ["17"]


@pytest.mark.asyncio
async def test_maintenance_page_keeps_previous_snapshot(make_agent, now):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    earlier = datetime(2025, 3, 12, 14, 0, tzinfo=timezone.utc)
    repo = InMemoryAgentSnapshotRepository([make_agent("17")], synced_at=earlier)
    client = httpx.AsyncClient(base_url="https://acme.test/api/v2", transport=httpx.MockTransport(handler))
    ticketing = HttpTicketingAdapter(client, ResilientSyncClient(RateLimitState()))

    result = await _sync(ticketing, repo, now).execute()

    assert not result.ok
    assert "non-JSON" in result.error
    assert await repo.last_successful_sync() == earlier
    assert [a.id for a in await repo.list_available_agents()] == ["17"]
