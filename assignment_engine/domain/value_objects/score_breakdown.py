"""ScoreBreakdown value object — per-factor result of scoring one (ticket, agent) pair."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScoreBreakdown:
    agent_id: str
    skill: float
    level: float
    workload: float
    location: float
    vip: float
    total: float
    weighted_load: float
    weights: dict[str, float] = field(default_factory=dict, hash=False, compare=True)

    def factors(self) -> dict[str, float]:
        return {
            "skill": self.skill,
            "level": self.level,
            "workload": self.workload,
            "location": self.location,
            "vip": self.vip,
        }

    def to_dict(self) -> dict:
        return {
            "agent_id": self.agent_id,
            "total": self.total,
            "weighted_load": self.weighted_load,
            "factors": self.factors(),
            "weights": dict(self.weights),
        }
