"""In-memory DecisionSink — append-only log keyed by ticket."""

from __future__ import annotations

from collections import defaultdict

from assignment_engine.application.ports.decision_sink import DecisionSink
from assignment_engine.domain.entities.decision import Decision


class InMemoryDecisionLog(DecisionSink):
    def __init__(self):
        self._by_ticket: dict[str, list[Decision]] = defaultdict(list)

    async def record(self, decision: Decision) -> None:
        self._by_ticket[decision.ticket_id].append(decision)

    async def latest_for_ticket(self, ticket_id: str) -> Decision | None:
        decisions = self._by_ticket.get(ticket_id)
        return decisions[-1] if decisions else None

    async def history(self, ticket_id: str) -> list[Decision]:
        return list(reversed(self._by_ticket.get(ticket_id, [])))
