"""Ticket entity — a support request awaiting routing."""

from dataclasses import dataclass, field
from datetime import datetime

from assignment_engine.domain.value_objects.enums import SupportLevel, SupportMode
from assignment_engine.domain.value_objects.location import Location


@dataclass(frozen=True)
class Ticket:
    id: str
    subject: str = ""
    required_skills: frozenset[str] = field(default_factory=frozenset)
    required_level: SupportLevel = SupportLevel.L1
    is_vip: bool = False
    support_mode: SupportMode | None = None
    location: Location | None = None
    created_at: datetime | None = None

    def requires_skills(self) -> bool:
        return bool(self.required_skills)
