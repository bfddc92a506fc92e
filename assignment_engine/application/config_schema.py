"""EngineConfigSchema — the single validation entry point for raw engine configuration.

Raw configuration (a JSON mapping) is validated here and converted into the
frozen domain ``EngineConfig``. Scoring weights are re-normalized to sum to
1.0; anything that cannot be made valid is rejected as a whole.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from assignment_engine.domain.exceptions import ConfigInvalidError
from assignment_engine.domain.value_objects.engine_config import (
    DecisionThresholds,
    EngineConfig,
    LocationCredit,
    RetrySettings,
    ScoringWeights,
    WorkloadCeiling,
    WorkloadDecay,
)


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class WeightsSchema(_Strict):
    skill: float = 0.30
    level: float = 0.25
    workload: float = 0.25
    location: float = 0.10
    vip: float = 0.10

    @model_validator(mode="after")
    def _usable(self) -> "WeightsSchema":
        values = self.model_dump()
        negative = [name for name, w in values.items() if w < 0]
        if negative:
            raise ValueError(f"weights must be non-negative: {', '.join(negative)}")
        if sum(values.values()) <= 0:
            raise ValueError("weights must not all be zero")
        return self

    def normalized(self) -> ScoringWeights:
        values = self.model_dump()
        total = sum(values.values())
        if math.isclose(total, 1.0):
            return ScoringWeights(**values)
        return ScoringWeights(**{name: w / total for name, w in values.items()})


class WorkloadDecaySchema(_Strict):
    fresh_max_days: int = Field(default=1, ge=0)
    recent_max_days: int = 5
    stale_max_days: int = 14
    fresh: float = Field(default=2.0, ge=0)
    recent: float = Field(default=1.2, ge=0)
    stale: float = Field(default=0.5, ge=0)
    abandoned: float = Field(default=0.1, ge=0)
    count_business_days: bool = True

    @model_validator(mode="after")
    def _ordered(self) -> "WorkloadDecaySchema":
        if not self.fresh_max_days < self.recent_max_days < self.stale_max_days:
            raise ValueError("bucket boundaries must be strictly increasing")
        if not self.fresh >= self.recent >= self.stale >= self.abandoned:
            raise ValueError("multipliers must not increase with ticket age")
        return self


class WorkloadCeilingSchema(_Strict):
    fixed: float | None = Field(default=None, gt=0)
    floor: float = Field(default=10.0, gt=0)
    factor: float = Field(default=1.2, gt=0)


class LocationSchema(_Strict):
    same_timezone: float = Field(default=0.5, ge=0, le=1)
    remote_floor: float = Field(default=0.3, ge=0, le=1)


class ThresholdsSchema(_Strict):
    auto_assign: float = Field(default=0.7, ge=0, le=1)
    suggest: float = Field(default=0.5, ge=0, le=1)

    @model_validator(mode="after")
    def _ordered(self) -> "ThresholdsSchema":
        if self.suggest >= self.auto_assign:
            raise ValueError("suggest threshold must be below auto_assign threshold")
        return self


class RetrySchema(_Strict):
    max_retries: int = Field(default=5, ge=0)
    initial_delay_ms: int = Field(default=1000, ge=0)
    max_delay_ms: int = Field(default=30000, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1)


class EngineConfigSchema(_Strict):
    weights: WeightsSchema = Field(default_factory=WeightsSchema)
    level_decay: list[float] = Field(default_factory=lambda: [1.0, 0.5, 0.0])
    workload_decay: WorkloadDecaySchema = Field(default_factory=WorkloadDecaySchema)
    workload_ceiling: WorkloadCeilingSchema = Field(default_factory=WorkloadCeilingSchema)
    location: LocationSchema = Field(default_factory=LocationSchema)
    thresholds: ThresholdsSchema = Field(default_factory=ThresholdsSchema)
    alternatives_count: int = Field(default=3, ge=0)
    tie_epsilon: float = Field(default=0.001, ge=0)
    freshness_window_seconds: int = Field(default=900, gt=0)
    auto_assign_enabled: bool = True
    retry: RetrySchema = Field(default_factory=RetrySchema)

    @field_validator("level_decay")
    @classmethod
    def _decay_curve(cls, v: list[float]) -> list[float]:
        if not v:
            raise ValueError("level_decay needs at least one value")
        if any(x < 0 or x > 1 for x in v):
            raise ValueError("level_decay values must be within [0, 1]")
        if any(later > earlier for earlier, later in zip(v, v[1:])):
            raise ValueError("level_decay must not increase with distance")
        return v

    def to_domain(self) -> EngineConfig:
        return EngineConfig(
            weights=self.weights.normalized(),
            level_decay=tuple(self.level_decay),
            workload_decay=WorkloadDecay(**self.workload_decay.model_dump()),
            workload_ceiling=WorkloadCeiling(**self.workload_ceiling.model_dump()),
            location=LocationCredit(**self.location.model_dump()),
            thresholds=DecisionThresholds(**self.thresholds.model_dump()),
            alternatives_count=self.alternatives_count,
            tie_epsilon=self.tie_epsilon,
            freshness_window_seconds=self.freshness_window_seconds,
            auto_assign_enabled=self.auto_assign_enabled,
            retry=RetrySettings(**self.retry.model_dump()),
        )


def parse_engine_config(raw: dict[str, Any]) -> EngineConfig:
    """Validate and normalize *raw*.

    Raises:
        ConfigInvalidError: with one message per validation problem.
    """
    try:
        return EngineConfigSchema.model_validate(raw).to_domain()
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigInvalidError("Invalid engine configuration", errors) from e
