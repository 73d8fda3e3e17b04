from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .primitives import Direction, PassengerStatus


@dataclass
class Passenger:
    """Represents a rider moving between floors."""

    passenger_id: int
    spawn_time: int
    origin: int
    destination: int
    status: PassengerStatus = PassengerStatus.WAITING
    pickup_time: Optional[int] = None
    dropoff_time: Optional[int] = None
    assigned_elevator_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValueError(f"Passenger {self.passenger_id} origin and destination are both {self.origin}")

    @property
    def direction(self) -> Direction:
        return Direction.UP if self.destination > self.origin else Direction.DOWN

    @property
    def is_waiting(self) -> bool:
        return self.status is PassengerStatus.WAITING

    @property
    def is_completed(self) -> bool:
        return self.status is PassengerStatus.COMPLETED

    def record_boarding(self, time_step: int, elevator_id: int) -> None:
        self.status = PassengerStatus.IN_ELEVATOR
        self.pickup_time = time_step
        self.assigned_elevator_id = elevator_id

    def record_alighting(self, time_step: int) -> None:
        self.status = PassengerStatus.COMPLETED
        self.dropoff_time = time_step

    @property
    def wait_time(self) -> Optional[int]:
        if self.pickup_time is None:
            return None
        return self.pickup_time - self.spawn_time

    @property
    def ride_time(self) -> Optional[int]:
        if self.pickup_time is None or self.dropoff_time is None:
            return None
        return self.dropoff_time - self.pickup_time

    @property
    def journey_time(self) -> Optional[int]:
        if self.dropoff_time is None:
            return None
        return self.dropoff_time - self.spawn_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.passenger_id,
            "spawn_time": self.spawn_time,
            "origin": self.origin,
            "destination": self.destination,
            "direction": self.direction.value,
            "status": self.status.value,
            "pickup_time": self.pickup_time,
            "dropoff_time": self.dropoff_time,
            "assigned_elevator_id": self.assigned_elevator_id,
        }
