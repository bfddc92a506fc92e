"""Agent entity — a human support agent as last seen by the snapshot sync."""

from dataclasses import dataclass, field
from datetime import datetime

from assignment_engine.domain.value_objects.enums import (
    LeaveStatus,
    LeaveType,
    SupportLevel,
    SupportMode,
)
from assignment_engine.domain.value_objects.location import Location


@dataclass(frozen=True)
class Leave:
    leave_type: LeaveType
    status: LeaveStatus = LeaveStatus.ACTIVE
    start: datetime | None = None
    end: datetime | None = None

    def blocks_work(self, now: datetime) -> bool:
        if not self.leave_type.blocks_work or self.status != LeaveStatus.ACTIVE:
            return False
        if self.start is not None and self.start > now:
            return False
        # Leave only counts as over once its end is strictly in the past
        return self.end is None or self.end >= now


@dataclass(frozen=True)
class OpenTicket:
    ticket_id: str
    age_days: int


@dataclass(frozen=True)
class Agent:
    id: str
    name: str
    level: SupportLevel
    email: str | None = None
    is_available: bool = True
    leave: Leave | None = None
    skills: frozenset[str] = field(default_factory=frozenset)
    location: Location | None = None
    is_remote: bool = False
    open_tickets: tuple[OpenTicket, ...] = ()
    vip_capable: bool = False
    vip_specialist: bool = False

    def is_on_leave(self, now: datetime) -> bool:
        return self.leave is not None and self.leave.blocks_work(now)

    def supports_mode(self, mode: SupportMode) -> bool:
        if mode == SupportMode.REMOTE and self.is_remote:
            return True
        return self.location is not None and self.location.supports(mode)

    def handles_vip(self) -> bool:
        return self.vip_capable or self.vip_specialist

    @property
    def ticket_ages(self) -> list[int]:
        return [t.age_days for t in self.open_tickets]
