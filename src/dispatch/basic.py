from __future__ import annotations

from typing import Dict, Optional, Sequence

from .interface import ElevatorSnapshot, PendingRequest, Score
from .utils import choose_lowest, floor_distance, is_ahead


class BasicDispatcher:
    """Flat-penalty scoring without turnaround modelling."""

    name = "basic"

    def __init__(self, floor_count: int = 10, load_weight: float = 2.0) -> None:
        self.floor_count = max(1, floor_count)
        self.load_weight = load_weight

    def select_elevator(
        self,
        elevators: Sequence[ElevatorSnapshot],
        request: PendingRequest,
    ) -> Optional[Score]:
        return choose_lowest(self.score(elevator, request) for elevator in elevators)

    def score(self, elevator: ElevatorSnapshot, request: PendingRequest) -> Optional[Score]:
        if elevator.is_full:
            return None

        distance = floor_distance(elevator.position, request.origin)
        breakdown: Dict[str, float] = {"distance": distance}
        if elevator.idle or elevator.direction == 0:
            pass
        elif elevator.direction == request.direction:
            if not is_ahead(elevator, request.origin):
                breakdown["behind"] = self.floor_count
        else:
            breakdown["reversal"] = self.floor_count * 2
            breakdown["targets"] = len(elevator.targets)
        breakdown["load"] = elevator.load * self.load_weight

        return Score(
            elevator_id=elevator.elevator_id,
            total=float(sum(breakdown.values())),
            breakdown=breakdown,
        )
