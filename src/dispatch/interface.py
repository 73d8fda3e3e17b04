from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Sequence, Tuple


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for dispatch decisions.

    ``direction`` is +1 for up, -1 for down and 0 for an idle car.
    """

    elevator_id: int
    position: int
    direction: int
    idle: bool
    targets: Tuple[int, ...]
    destinations: Tuple[int, ...]
    load: int
    capacity: int

    @property
    def available_capacity(self) -> int:
        return max(0, self.capacity - self.load)

    @property
    def is_full(self) -> bool:
        return self.load >= self.capacity

    @property
    def pending_floors(self) -> Tuple[int, ...]:
        return tuple(sorted(set(self.targets) | set(self.destinations)))


@dataclass(frozen=True)
class PendingRequest:
    """Representation of one passenger's hall call for dispatchers."""

    origin: int
    direction: int
    requested_at: int
    passenger_id: int


@dataclass(frozen=True)
class Score:
    """Cost of sending one elevator to a request; lower is better."""

    elevator_id: int
    total: float
    breakdown: Dict[str, float] = field(default_factory=dict)


class Dispatcher(Protocol):
    """Strategy interface for choosing an elevator for a hall call."""

    name: str

    def score(self, elevator: ElevatorSnapshot, request: PendingRequest) -> Optional[Score]:
        """Return the elevator's cost for the request, or None if it is ineligible."""
        ...

    def select_elevator(
        self,
        elevators: Sequence[ElevatorSnapshot],
        request: PendingRequest,
    ) -> Optional[Score]:
        """
        Return the winning score, or None when no elevator can take the call.

        Implementations must pick the strictly lowest score and resolve ties
        in favour of the elevator enumerated first.
        """
        ...
