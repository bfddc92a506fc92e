"""EngineConfig — immutable tuning values read once per decision pass.

Instances are built by ``EngineConfigSchema`` (application layer), which is the
only place raw configuration is validated and weights are normalized. The
defaults here are already valid.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScoringWeights:
    skill: float = 0.30
    level: float = 0.25
    workload: float = 0.25
    location: float = 0.10
    vip: float = 0.10

    def as_dict(self) -> dict[str, float]:
        return {
            "skill": self.skill,
            "level": self.level,
            "workload": self.workload,
            "location": self.location,
            "vip": self.vip,
        }


@dataclass(frozen=True)
class WorkloadDecay:
    """Age buckets by inclusive upper bound in days, plus their multipliers."""

    fresh_max_days: int = 1
    recent_max_days: int = 5
    stale_max_days: int = 14
    fresh: float = 2.0
    recent: float = 1.2
    stale: float = 0.5
    abandoned: float = 0.1
    count_business_days: bool = True


@dataclass(frozen=True)
class WorkloadCeiling:
    """Fixed ceiling when ``fixed`` is set, otherwise max(floor, ceil(load * factor))."""

    fixed: float | None = None
    floor: float = 10.0
    factor: float = 1.2


@dataclass(frozen=True)
class LocationCredit:
    same_timezone: float = 0.5
    remote_floor: float = 0.3


@dataclass(frozen=True)
class DecisionThresholds:
    auto_assign: float = 0.7
    suggest: float = 0.5


@dataclass(frozen=True)
class RetrySettings:
    max_retries: int = 5
    initial_delay_ms: int = 1000
    max_delay_ms: int = 30000
    backoff_multiplier: float = 2.0


@dataclass(frozen=True)
class EngineConfig:
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    level_decay: tuple[float, ...] = (1.0, 0.5, 0.0)
    workload_decay: WorkloadDecay = field(default_factory=WorkloadDecay)
    workload_ceiling: WorkloadCeiling = field(default_factory=WorkloadCeiling)
    location: LocationCredit = field(default_factory=LocationCredit)
    thresholds: DecisionThresholds = field(default_factory=DecisionThresholds)
    alternatives_count: int = 3
    tie_epsilon: float = 0.001
    freshness_window_seconds: int = 900
    auto_assign_enabled: bool = True
    retry: RetrySettings = field(default_factory=RetrySettings)
