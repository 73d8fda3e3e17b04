from __future__ import annotations

from typing import Dict, Optional, Sequence

from .interface import ElevatorSnapshot, PendingRequest, Score
from .utils import choose_lowest, floor_distance, furthest_target, is_ahead


class CostDispatcher:
    """Scores every elevator against a call and picks the cheapest.

    The cost is expressed in floors of travel:

    * an idle car costs its distance to the call;
    * a car already sweeping in the call's direction costs its distance if
      the call is ahead, plus ``behind_penalty`` if it has already passed;
    * a car sweeping the other way costs the trip to its turnaround floor,
      the trip back to the call and ``reversal_penalty``.

    Small per-passenger and per-target weights break ties in favour of
    lightly loaded cars. Full cars are skipped unless ``exclude_full`` is
    False, in which case they carry ``full_penalty`` instead.
    """

    name = "cost"

    def __init__(
        self,
        floor_count: int = 10,
        behind_penalty: Optional[float] = None,
        reversal_penalty: Optional[float] = None,
        load_weight: float = 1.0,
        target_weight: float = 0.5,
        exclude_full: bool = True,
        full_penalty: float = 1000.0,
    ) -> None:
        self.floor_count = max(1, floor_count)
        self.behind_penalty = float(self.floor_count if behind_penalty is None else behind_penalty)
        self.reversal_penalty = float(self.floor_count if reversal_penalty is None else reversal_penalty)
        self.load_weight = load_weight
        self.target_weight = target_weight
        self.exclude_full = exclude_full
        self.full_penalty = full_penalty

    def select_elevator(
        self,
        elevators: Sequence[ElevatorSnapshot],
        request: PendingRequest,
    ) -> Optional[Score]:
        return choose_lowest(self.score(elevator, request) for elevator in elevators)

    def score(self, elevator: ElevatorSnapshot, request: PendingRequest) -> Optional[Score]:
        if elevator.is_full and self.exclude_full:
            return None

        breakdown: Dict[str, float] = {}
        distance = floor_distance(elevator.position, request.origin)

        if elevator.idle or elevator.direction == 0:
            breakdown["distance"] = distance
        elif elevator.direction == request.direction:
            breakdown["distance"] = distance
            if not is_ahead(elevator, request.origin):
                breakdown["behind"] = self.behind_penalty
        else:
            turnaround = furthest_target(elevator)
            breakdown["to_turnaround"] = floor_distance(elevator.position, turnaround)
            breakdown["turnaround_to_call"] = floor_distance(turnaround, request.origin)
            breakdown["reversal"] = self.reversal_penalty

        if elevator.is_full:
            breakdown["full"] = self.full_penalty
        breakdown["load"] = elevator.load * self.load_weight
        breakdown["targets"] = len(elevator.targets) * self.target_weight

        return Score(
            elevator_id=elevator.elevator_id,
            total=float(sum(breakdown.values())),
            breakdown=breakdown,
        )
