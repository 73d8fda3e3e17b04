from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Mapping, Optional


class ConfigurationError(ValueError):
    """Raised when a configuration violates a precondition of the engine."""


@dataclass
class SimulationConfig:
    """Static building, elevator, timing and demand settings for one run."""

    min_floor: int = 1
    max_floor: int = 10
    elevator_count: int = 2
    elevator_capacity: int = 5
    travel_time_per_floor: int = 1
    door_hold_ticks: int = 1
    generation_interval: int = 1
    total_passengers: int = 40
    estimated_processing_time: float = 5
    random_seed: Optional[int] = None
    max_cycles: Optional[int] = None
    dispatcher: str = "cost"
    dispatcher_options: Dict[str, Any] = field(default_factory=dict)

    @property
    def floor_count(self) -> int:
        return self.max_floor - self.min_floor + 1

    @property
    def cycle_ceiling(self) -> int:
        """Maximum number of ticks before the run is declared stuck."""
        if self.max_cycles is not None:
            return self.max_cycles
        derived = self.total_passengers * self.floor_count * self.estimated_processing_time
        return max(1, int(derived))

    def validate(self) -> None:
        if self.max_floor <= self.min_floor:
            raise ConfigurationError(
                f"max_floor ({self.max_floor}) must be greater than min_floor ({self.min_floor})"
            )
        positive = (
            "elevator_count",
            "elevator_capacity",
            "travel_time_per_floor",
            "door_hold_ticks",
            "generation_interval",
        )
        for name in positive:
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.total_passengers < 0:
            raise ConfigurationError("total_passengers cannot be negative")
        if self.estimated_processing_time <= 0:
            raise ConfigurationError("estimated_processing_time must be positive")
        if self.max_cycles is not None and self.max_cycles < 1:
            raise ConfigurationError("max_cycles must be at least 1 when given")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
