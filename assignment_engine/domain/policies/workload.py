"""WorkloadPolicy — decayed "weighted load" from open-ticket ages.

Raw ticket counts let agents hoard old tickets to dodge new work. Weighting
each open ticket by an age-bucket multiplier makes the load reflect near-term
capacity pressure instead:

    fresh (0-1 days)      x 2.0
    recent (2-5 days)     x 1.2
    stale (6-14 days)     x 0.5
    abandoned (15+ days)  x 0.1

Boundaries and multipliers come from ``WorkloadDecay`` so they can be
reloaded; callers pass the same instance for every agent in a pass.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from assignment_engine.domain.entities.agent import Agent
from assignment_engine.domain.value_objects.engine_config import WorkloadDecay
from assignment_engine.domain.value_objects.enums import AgeBucket


@dataclass(frozen=True)
class WeightedLoad:
    total: float
    raw_count: int
    breakdown: dict[AgeBucket, int] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "raw_count": self.raw_count,
            "breakdown": {bucket.value: count for bucket, count in self.breakdown.items()},
        }


def bucket_for_age(age_days: int, decay: WorkloadDecay) -> AgeBucket:
    age = max(0, age_days)
    if age <= decay.fresh_max_days:
        return AgeBucket.FRESH
    if age <= decay.recent_max_days:
        return AgeBucket.RECENT
    if age <= decay.stale_max_days:
        return AgeBucket.STALE
    return AgeBucket.ABANDONED


def multiplier_for(bucket: AgeBucket, decay: WorkloadDecay) -> float:
    return {
        AgeBucket.FRESH: decay.fresh,
        AgeBucket.RECENT: decay.recent,
        AgeBucket.STALE: decay.stale,
        AgeBucket.ABANDONED: decay.abandoned,
    }[bucket]


def compute_weighted_load(
    source: Agent | Iterable[int],
    decay: WorkloadDecay,
) -> WeightedLoad:
    """Bucket every open ticket by age and sum the bucket multipliers.

    Args:
        source: an Agent (its open tickets are used) or raw ages in days.
        decay: bucket boundaries and multipliers for this pass.

    Returns:
        WeightedLoad with the total and per-bucket counts.
    """
    ages = source.ticket_ages if isinstance(source, Agent) else list(source)

    breakdown = {bucket: 0 for bucket in AgeBucket}
    for age in ages:
        breakdown[bucket_for_age(age, decay)] += 1

    total = sum(count * multiplier_for(bucket, decay) for bucket, count in breakdown.items())
    return WeightedLoad(total=round(total, 6), raw_count=len(ages), breakdown=breakdown)


def business_days_between(start: datetime | date, end: datetime | date) -> int:
    """Whole weekdays elapsed from *start* to *end*, not counting the start day."""
    start_day = start.date() if isinstance(start, datetime) else start
    end_day = end.date() if isinstance(end, datetime) else end
    if end_day <= start_day:
        return 0

    count = 0
    current = start_day + timedelta(days=1)
    while current <= end_day:
        if current.weekday() < 5:
            count += 1
        current += timedelta(days=1)
    return count


def ticket_age_days(created_at: datetime, now: datetime, business_days: bool = True) -> int:
    if business_days:
        return business_days_between(created_at, now)
    return max(0, (now - created_at).days)
