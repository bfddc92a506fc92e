"""Request bodies for the HTTP API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from assignment_engine.domain.entities.ticket import Ticket
from assignment_engine.domain.value_objects.enums import SupportLevel, SupportMode
from assignment_engine.domain.value_objects.location import Location


class LocationPayload(BaseModel):
    name: str
    timezone: str = "UTC"
    city: str | None = None
    support_modes: list[SupportMode] = Field(default_factory=lambda: [SupportMode.REMOTE])

    def to_domain(self) -> Location:
        return Location(
            name=self.name,
            timezone=self.timezone,
            city=self.city,
            support_modes=frozenset(self.support_modes),
        )


class TicketPayload(BaseModel):
    id: str = "simulated"
    subject: str = ""
    required_skills: list[str] = Field(default_factory=list)
    required_level: SupportLevel = SupportLevel.L1
    is_vip: bool = False
    support_mode: SupportMode | None = None
    location: LocationPayload | None = None
    created_at: datetime | None = None

    def to_domain(self) -> Ticket:
        return Ticket(
            id=self.id,
            subject=self.subject,
            required_skills=frozenset(s.strip().lower() for s in self.required_skills if s.strip()),
            required_level=self.required_level,
            is_vip=self.is_vip,
            support_mode=self.support_mode,
            location=self.location.to_domain() if self.location else None,
            created_at=self.created_at,
        )


class OverrideRequest(BaseModel):
    agent_id: str
    reason: str = Field(min_length=1)
    operator: str | None = None
