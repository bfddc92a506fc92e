"""Location value object — immutable site description with handling modes."""

from dataclasses import dataclass, field

from assignment_engine.domain.value_objects.enums import SupportMode


@dataclass(frozen=True)
class Location:
    name: str
    timezone: str
    city: str | None = None
    support_modes: frozenset[SupportMode] = field(
        default_factory=lambda: frozenset({SupportMode.REMOTE})
    )

    def supports(self, mode: SupportMode) -> bool:
        return mode in self.support_modes

    def matches(self, other: "Location") -> bool:
        return self.name.strip().lower() == other.name.strip().lower()

    def same_timezone(self, other: "Location") -> bool:
        return self.timezone == other.timezone
