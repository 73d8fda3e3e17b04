from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set

from .passenger import Passenger
from .primitives import Direction, ElevatorStatus

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .state import SimulationState


@dataclass
class Elevator:
    """A single car with door timing, LOOK target selection and stop handling."""

    elevator_id: int
    capacity: int
    current_floor: int = 1
    passengers: List[Passenger] = field(default_factory=list)
    status: ElevatorStatus = ElevatorStatus.IDLE
    direction: Direction = Direction.IDLE
    target_floors: Set[int] = field(default_factory=set)
    door_timer: int = 0
    held_pickups: Set[int] = field(default_factory=set)
    _travel_ticks: int = 0

    @property
    def is_full(self) -> bool:
        return len(self.passengers) >= self.capacity

    @property
    def is_idle(self) -> bool:
        return self.status is ElevatorStatus.IDLE

    def pending_floors(self) -> List[int]:
        """Sorted union of committed targets and on-board destinations."""
        floors = set(self.target_floors)
        floors.update(p.destination for p in self.passengers)
        return sorted(floors)

    def has_targets_ahead(self) -> bool:
        floors = self.pending_floors()
        if self.direction is Direction.UP:
            return any(f > self.current_floor for f in floors)
        if self.direction is Direction.DOWN:
            return any(f < self.current_floor for f in floors)
        return False

    def commit_call(self, floor: int) -> bool:
        """Add a hall call floor; an idle car starts heading there at once.

        A full car holds the floor back until a rider alights and returns
        False, so it never turns around for a pickup it cannot serve.
        """
        if self.is_full:
            self.held_pickups.add(floor)
            return False
        self.target_floors.add(floor)
        if not self.is_idle:
            return True
        if floor == self.current_floor:
            # Picked up by the stop check on the next tick.
            self.status = ElevatorStatus.STOPPED
        else:
            self._head_toward(floor)
        return True

    def next_target(self) -> Optional[int]:
        """Pick the next floor with a LOOK scan over all pending floors."""
        floors = self.pending_floors()
        if not floors:
            return None

        here = self.current_floor
        if self.direction in (Direction.UP, Direction.IDLE):
            above = [f for f in floors if f >= here]
            if above:
                return above[0]
            return floors[0]

        below = [f for f in floors if f <= here]
        if below:
            return below[-1]
        return floors[-1]

    def step(self, state: "SimulationState") -> None:
        """Advance this car by one tick."""
        if self.door_timer > 0:
            self.door_timer -= 1
            if self.door_timer == 0:
                self._resume()
            return

        if self.should_stop_here(state):
            self.process_stop(state)
            return

        if not self.target_floors and not self.passengers:
            self._go_idle()
            return

        target = self.next_target()
        if target is None:
            self._go_idle()
            return
        if target == self.current_floor:
            self.process_stop(state)
            return

        previous = self.direction
        self._head_toward(target)
        if self.direction is not previous:
            self._travel_ticks = 0
        self._travel_ticks += 1
        if self._travel_ticks < state.config.travel_time_per_floor:
            return
        self._travel_ticks = 0
        self.current_floor += self.direction.step
        state.log.record(
            state.current_time,
            f"Elevator {self.elevator_id} moved to floor {self.current_floor} ({self.direction.value})",
            elevator_id=self.elevator_id,
            floor=self.current_floor,
            details={
                "direction": self.direction.value,
                "passengers": len(self.passengers),
                "targets": ",".join(str(f) for f in sorted(self.target_floors)),
            },
        )

    def should_stop_here(self, state: "SimulationState") -> bool:
        floor = self.current_floor
        if any(p.destination == floor for p in self.passengers):
            return True

        if not self.is_full:
            turning = not self.has_targets_ahead()
            for passenger in state.waiting_for(self.elevator_id, floor):
                if (
                    self.direction is Direction.IDLE
                    or self.is_idle
                    or passenger.direction is self.direction
                    or turning
                ):
                    return True

        return floor in self.target_floors

    def process_stop(self, state: "SimulationState") -> None:
        if self.status is ElevatorStatus.DOORS_OPEN and self.door_timer > 0:
            return

        floor = self.current_floor
        now = state.current_time
        self.status = ElevatorStatus.DOORS_OPEN
        self.door_timer = state.config.door_hold_ticks
        self._travel_ticks = 0
        state.log.record(
            now,
            f"Elevator {self.elevator_id} stopped at floor {floor}, doors open",
            elevator_id=self.elevator_id,
            floor=floor,
        )

        # Alight
        remaining: List[Passenger] = []
        for passenger in self.passengers:
            if passenger.destination != floor:
                remaining.append(passenger)
                continue
            passenger.record_alighting(now)
            state.passengers_completed += 1
            state.metrics.record_ride_time(passenger)
            state.log.record(
                now,
                f"Passenger {passenger.passenger_id} arrived at floor {floor} and left elevator {self.elevator_id}",
                elevator_id=self.elevator_id,
                passenger_id=passenger.passenger_id,
                floor=floor,
            )
        self.passengers = remaining

        # Board
        for passenger in state.waiting_for(self.elevator_id, floor):
            if self.is_full:
                passenger.assigned_elevator_id = None
                state.calls.ensure(passenger, now)
                state.log.record(
                    now,
                    f"Elevator {self.elevator_id} is full, passenger {passenger.passenger_id} "
                    f"stays at floor {floor} for reassignment",
                    elevator_id=self.elevator_id,
                    passenger_id=passenger.passenger_id,
                    floor=floor,
                    details={"reason": "boarding_overflow", "passengers": len(self.passengers)},
                    level=logging.WARNING,
                )
                continue
            passenger.record_boarding(now, self.elevator_id)
            self.passengers.append(passenger)
            self.target_floors.add(passenger.destination)
            state.calls.remove(passenger.passenger_id)
            state.metrics.record_wait_time(passenger)
            state.log.record(
                now,
                f"Passenger {passenger.passenger_id} boarded elevator {self.elevator_id} at floor {floor}",
                elevator_id=self.elevator_id,
                passenger_id=passenger.passenger_id,
                floor=floor,
                details={"destination": passenger.destination},
            )

        self.target_floors.discard(floor)
        self._release_held_pickups(state)

    def _release_held_pickups(self, state: "SimulationState") -> None:
        if self.is_full or not self.held_pickups:
            return
        for floor in sorted(self.held_pickups):
            if state.waiting_for(self.elevator_id, floor):
                self.target_floors.add(floor)
        self.held_pickups.clear()

    def _resume(self) -> None:
        target = self.next_target()
        if target is None:
            self._go_idle()
        elif target == self.current_floor:
            self.status = ElevatorStatus.STOPPED
        else:
            self._head_toward(target)

    def _head_toward(self, floor: int) -> None:
        self.direction = Direction.between(self.current_floor, floor)
        self.status = ElevatorStatus.moving(self.direction)

    def _go_idle(self) -> None:
        self.status = ElevatorStatus.IDLE
        self.direction = Direction.IDLE
        self._travel_ticks = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.elevator_id,
            "current_floor": self.current_floor,
            "status": self.status.value,
            "direction": self.direction.value,
            "capacity": self.capacity,
            "passengers": [p.passenger_id for p in self.passengers],
            "target_floors": sorted(self.target_floors),
            "held_pickups": sorted(self.held_pickups),
            "door_timer": self.door_timer,
        }
