"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class SupportLevel(str, Enum):
    L1 = "L1"
    L2 = "L2"
    L3 = "L3"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]


_LEVEL_RANK = {SupportLevel.L1: 1, SupportLevel.L2: 2, SupportLevel.L3: 3}


class SupportMode(str, Enum):
    ONSITE = "onsite"
    REMOTE = "remote"


class LeaveType(str, Enum):
    WFH = "WFH"
    SITE_VISIT = "Site Visit"
    TRAINING = "Training & Conferences"
    SICK_DAY = "Sick Day"
    VACATION = "Vacation"
    PTO = "Personal Time Off (PTO)"

    @property
    def blocks_work(self) -> bool:
        """WFH, site visits and training keep the agent assignable."""
        return self not in (LeaveType.WFH, LeaveType.SITE_VISIT, LeaveType.TRAINING)


class LeaveStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    CANCELLED = "cancelled"


class AgeBucket(str, Enum):
    FRESH = "fresh"
    RECENT = "recent"
    STALE = "stale"
    ABANDONED = "abandoned"


class RejectionReason(str, Enum):
    UNAVAILABLE = "UNAVAILABLE"
    ON_LEAVE = "ON_LEAVE"
    SUPPORT_MODE_MISMATCH = "SUPPORT_MODE_MISMATCH"
    LEVEL_TOO_LOW = "LEVEL_TOO_LOW"
    SKILL_MISMATCH = "SKILL_MISMATCH"
    NOT_VIP_CAPABLE = "NOT_VIP_CAPABLE"


class DecisionType(str, Enum):
    AUTO_ASSIGNED = "AUTO_ASSIGNED"
    SUGGESTED = "SUGGESTED"
    MANUAL_OVERRIDE = "MANUAL_OVERRIDE"


class TerminalState(str, Enum):
    NO_ELIGIBLE_AGENT = "NO_ELIGIBLE_AGENT"
    NO_CONFIDENT_MATCH = "NO_CONFIDENT_MATCH"
