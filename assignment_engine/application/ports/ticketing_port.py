"""Port interface for the upstream ticketing system."""

from abc import ABC, abstractmethod

from assignment_engine.domain.entities.agent import Agent
from assignment_engine.domain.entities.ticket import Ticket


class TicketingPort(ABC):
    @abstractmethod
    async def fetch_agents(self) -> list[Agent]:
        """Agents without open tickets attached."""
        ...

    @abstractmethod
    async def fetch_open_tickets(self) -> list[tuple[Ticket, str | None]]:
        """Open/pending tickets paired with their responder (agent) id."""
        ...

    @abstractmethod
    async def fetch_ticket(self, ticket_id: str) -> Ticket | None:
        ...

    @abstractmethod
    async def assign_ticket(self, ticket_id: str, agent_id: str) -> None:
        ...
