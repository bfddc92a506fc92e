"""In-memory AgentSnapshotRepository.

The whole snapshot is a single immutable object swapped by reference, so a
decision pass that already read it keeps a consistent view while a sync
replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from assignment_engine.application.ports.agent_snapshot_repo import AgentSnapshotRepository
from assignment_engine.domain.entities.agent import Agent
from assignment_engine.domain.entities.ticket import Ticket


@dataclass(frozen=True)
class _Snapshot:
    agents: tuple[Agent, ...] = ()
    agents_by_id: dict[str, Agent] = field(default_factory=dict)
    tickets_by_id: dict[str, Ticket] = field(default_factory=dict)
    synced_at: datetime | None = None


class InMemoryAgentSnapshotRepository(AgentSnapshotRepository):
    def __init__(
        self,
        agents: list[Agent] | None = None,
        tickets: list[Ticket] | None = None,
        synced_at: datetime | None = None,
    ):
        self._snapshot = self._build(agents or [], tickets or [], synced_at)

    @staticmethod
    def _build(agents: list[Agent], tickets: list[Ticket], synced_at: datetime | None) -> _Snapshot:
        return _Snapshot(
            agents=tuple(agents),
            agents_by_id={a.id: a for a in agents},
            tickets_by_id={t.id: t for t in tickets},
            synced_at=synced_at,
        )

    async def list_available_agents(self) -> list[Agent]:
        return list(self._snapshot.agents)

    async def agent_pool(self) -> tuple[list[Agent], datetime | None]:
        snapshot = self._snapshot
        return list(snapshot.agents), snapshot.synced_at

    async def get_agent(self, agent_id: str) -> Agent | None:
        return self._snapshot.agents_by_id.get(agent_id)

    async def get_ticket(self, ticket_id: str) -> Ticket | None:
        return self._snapshot.tickets_by_id.get(ticket_id)

    async def replace(self, agents: list[Agent], tickets: list[Ticket], synced_at: datetime) -> None:
        self._snapshot = self._build(agents, tickets, synced_at)

    async def last_successful_sync(self) -> datetime | None:
        return self._snapshot.synced_at
