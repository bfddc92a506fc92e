"""SyncSnapshotUseCase — refresh the agent/ticket snapshot from the ticketing system.

Either the whole snapshot is replaced or nothing changes: on any upstream
failure the previous snapshot (and its sync timestamp) stays live, so the
decision pass sees it as stale once the freshness window passes.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime

from assignment_engine.application.config_provider import EngineConfigProvider
from assignment_engine.application.ports.agent_snapshot_repo import AgentSnapshotRepository
from assignment_engine.application.ports.ticketing_port import TicketingPort
from assignment_engine.application.use_cases.decide_assignment import utcnow
from assignment_engine.domain.entities.agent import OpenTicket
from assignment_engine.domain.exceptions import UpstreamRateLimitedError, UpstreamUnavailableError
from assignment_engine.domain.policies.workload import ticket_age_days

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    ok: bool
    agents: int = 0
    open_tickets: int = 0
    unmatched_tickets: int = 0
    synced_at: datetime | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "agents": self.agents,
            "open_tickets": self.open_tickets,
            "unmatched_tickets": self.unmatched_tickets,
            "synced_at": self.synced_at.isoformat() if self.synced_at else None,
            "error": self.error,
        }


class SyncSnapshotUseCase:
    def __init__(
        self,
        ticketing: TicketingPort,
        snapshot_repo: AgentSnapshotRepository,
        config_provider: EngineConfigProvider,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._ticketing = ticketing
        self._snapshot = snapshot_repo
        self._config = config_provider
        self._clock = clock

    async def execute(self) -> SyncResult:
        started = self._clock()
        try:
            agents = await self._ticketing.fetch_agents()
            open_tickets = await self._ticketing.fetch_open_tickets()
        except (UpstreamRateLimitedError, UpstreamUnavailableError) as e:
            last = await self._snapshot.last_successful_sync()
            logger.warning(
                "Snapshot sync failed, keeping previous snapshot (last sync: %s): %s",
                last.isoformat() if last else "never", e,
            )
            return SyncResult(ok=False, synced_at=last, error=str(e))

        business_days = self._config.current().workload_decay.count_business_days
        known = {agent.id for agent in agents}
        by_agent: dict[str, list[OpenTicket]] = defaultdict(list)
        unmatched = 0

        for ticket, responder_id in open_tickets:
            if responder_id is None:
                continue
            if responder_id not in known:
                unmatched += 1
                continue
            age = ticket_age_days(ticket.created_at, started, business_days) if ticket.created_at else 0
            by_agent[responder_id].append(OpenTicket(ticket_id=ticket.id, age_days=age))

        if unmatched:
            logger.warning("%d open tickets belong to responders outside the agent pool", unmatched)

        synced_agents = [replace(a, open_tickets=tuple(by_agent.get(a.id, ()))) for a in agents]
        tickets = [ticket for ticket, _ in open_tickets]
        await self._snapshot.replace(synced_agents, tickets, started)

        logger.info(
            "Snapshot synced: %d agents, %d open tickets (%d unmatched)",
            len(synced_agents), len(tickets), unmatched,
        )
        return SyncResult(
            ok=True,
            agents=len(synced_agents),
            open_tickets=len(tickets),
            unmatched_tickets=unmatched,
            synced_at=started,
        )
