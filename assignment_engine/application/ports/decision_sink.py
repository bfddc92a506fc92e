"""Port interface for decision recording."""

from abc import ABC, abstractmethod

from assignment_engine.domain.entities.decision import Decision


class DecisionSink(ABC):
    @abstractmethod
    async def record(self, decision: Decision) -> None:
        ...

    @abstractmethod
    async def latest_for_ticket(self, ticket_id: str) -> Decision | None:
        ...

    @abstractmethod
    async def history(self, ticket_id: str) -> list[Decision]:
        """All decisions for a ticket, newest first."""
        ...
