from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dispatch import Dispatcher, ElevatorSnapshot, PendingRequest, Score, get_dispatcher

from .calls import CallRegistry, FloorCall
from .config import SimulationConfig
from .elevator import Elevator
from .events import EventLog
from .metrics import MetricsTracker
from .passenger import Passenger
from .primitives import PassengerStatus

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Everything one run mutates: elevators, riders, calls and the trace."""

    config: SimulationConfig
    current_time: int = 0
    elevators: List[Elevator] = field(default_factory=list)
    passengers: List[Passenger] = field(default_factory=list)
    calls: CallRegistry = field(default_factory=CallRegistry)
    log: EventLog = field(default_factory=EventLog)
    metrics: MetricsTracker = field(default_factory=MetricsTracker)
    passengers_generated: int = 0
    passengers_completed: int = 0
    dispatcher: Dispatcher = field(init=False)

    def __post_init__(self) -> None:
        if not self.elevators:
            self.elevators = [
                Elevator(i + 1, capacity=self.config.elevator_capacity, current_floor=self.config.min_floor)
                for i in range(self.config.elevator_count)
            ]
        self.set_dispatcher(self.config.dispatcher, **self.config.dispatcher_options)

    def set_dispatcher(self, name: str, **options) -> None:
        options.setdefault("floor_count", self.config.floor_count)
        self.dispatcher = get_dispatcher(name, **options)
        logger.debug("Dispatcher set to %s with %s", name, options)

    def get_elevator(self, elevator_id: int) -> Optional[Elevator]:
        for elevator in self.elevators:
            if elevator.elevator_id == elevator_id:
                return elevator
        return None

    def waiting_for(self, elevator_id: int, floor: int) -> List[Passenger]:
        """Waiting riders assigned to ``elevator_id`` at ``floor``, in arrival order."""
        return [
            p
            for p in self.passengers
            if p.is_waiting and p.origin == floor and p.assigned_elevator_id == elevator_id
        ]

    def unassigned_waiting(self) -> List[Passenger]:
        return [p for p in self.passengers if p.is_waiting and p.assigned_elevator_id is None]

    def status_counts(self) -> Dict[PassengerStatus, int]:
        counts = {status: 0 for status in PassengerStatus}
        for passenger in self.passengers:
            counts[passenger.status] += 1
        return counts

    def assign(self, call: FloorCall) -> Optional[int]:
        """Commit the call to the cheapest elevator and return its id."""
        score = self._commit(call)
        return None if score is None else score.elevator_id

    def dispatch(self) -> None:
        """Try to place every waiting rider that has no elevator yet."""
        for passenger in self.unassigned_waiting():
            call = self.calls.ensure(passenger, self.current_time)
            score = self._commit(call)
            if score is None:
                self.log.record(
                    self.current_time,
                    f"No elevator available for passenger {passenger.passenger_id} "
                    f"({passenger.origin} -> {passenger.destination}), waiting",
                    passenger_id=passenger.passenger_id,
                    floor=passenger.origin,
                    details={"reason": "deferred"},
                    level=logging.WARNING,
                )
                continue
            passenger.assigned_elevator_id = score.elevator_id
            details = dict(score.breakdown, score=score.total)
            elevator = self.get_elevator(score.elevator_id)
            if elevator is not None and call.floor in elevator.held_pickups:
                details["pickup"] = "held until a rider alights"
            self.log.record(
                self.current_time,
                f"Assigned passenger {passenger.passenger_id} "
                f"({passenger.origin} -> {passenger.destination}) to elevator {score.elevator_id}",
                elevator_id=score.elevator_id,
                passenger_id=passenger.passenger_id,
                floor=passenger.origin,
                details=details,
            )

    def snapshot(self) -> dict:
        counts = self.status_counts()
        return {
            "time": self.current_time,
            "passengers": {status.value: count for status, count in counts.items()},
            "pending_calls": len(self.calls),
            "elevators": [elevator.to_dict() for elevator in self.elevators],
        }

    def _commit(self, call: FloorCall) -> Optional[Score]:
        request = PendingRequest(
            origin=call.floor,
            direction=call.direction.step,
            requested_at=call.requested_at,
            passenger_id=call.passenger_id,
        )
        score = self.dispatcher.select_elevator(self._snapshot_elevators(), request)
        if score is None:
            return None
        elevator = self.get_elevator(score.elevator_id)
        if elevator is None:
            return None
        elevator.commit_call(call.floor)
        return score

    def _snapshot_elevators(self) -> List[ElevatorSnapshot]:
        return [
            ElevatorSnapshot(
                elevator_id=elevator.elevator_id,
                position=elevator.current_floor,
                direction=elevator.direction.step,
                idle=elevator.is_idle,
                targets=tuple(sorted(elevator.target_floors)),
                destinations=tuple(p.destination for p in elevator.passengers),
                load=len(elevator.passengers),
                capacity=elevator.capacity,
            )
            for elevator in self.elevators
        ]
