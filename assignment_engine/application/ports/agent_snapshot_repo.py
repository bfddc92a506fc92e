"""Port interface for the synced agent/ticket snapshot."""

from abc import ABC, abstractmethod
from datetime import datetime

from assignment_engine.domain.entities.agent import Agent
from assignment_engine.domain.entities.ticket import Ticket


class AgentSnapshotRepository(ABC):
    @abstractmethod
    async def list_available_agents(self) -> list[Agent]:
        """Return the agent pool from the latest snapshot, in stable order."""
        ...

    @abstractmethod
    async def agent_pool(self) -> tuple[list[Agent], datetime | None]:
        """Return the agent pool and its sync time, both from the same snapshot."""
        ...

    @abstractmethod
    async def get_agent(self, agent_id: str) -> Agent | None:
        ...

    @abstractmethod
    async def get_ticket(self, ticket_id: str) -> Ticket | None:
        ...

    @abstractmethod
    async def replace(
        self, agents: list[Agent], tickets: list[Ticket], synced_at: datetime
    ) -> None:
        """Swap in a complete new snapshot. Readers never see a partial one."""
        ...

    @abstractmethod
    async def last_successful_sync(self) -> datetime | None:
        ...
