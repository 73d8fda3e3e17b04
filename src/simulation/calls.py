from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .passenger import Passenger
from .primitives import Direction


@dataclass(frozen=True)
class FloorCall:
    """A pending hall call made by one passenger."""

    floor: int
    direction: Direction
    requested_at: int
    passenger_id: int

    @classmethod
    def for_passenger(cls, passenger: Passenger, requested_at: int) -> "FloorCall":
        return cls(
            floor=passenger.origin,
            direction=passenger.direction,
            requested_at=requested_at,
            passenger_id=passenger.passenger_id,
        )


@dataclass
class CallRegistry:
    """Outstanding floor calls, one per waiting passenger.

    Calls on the same floor are kept apart because each one carries the
    passenger that boarding has to match against.
    """

    calls: List[FloorCall] = field(default_factory=list)

    def add(self, call: FloorCall) -> None:
        self.calls.append(call)

    def find(self, passenger_id: int) -> Optional[FloorCall]:
        for call in self.calls:
            if call.passenger_id == passenger_id:
                return call
        return None

    def ensure(self, passenger: Passenger, requested_at: int) -> FloorCall:
        """Return the passenger's call, re-queuing it if it is missing."""
        call = self.find(passenger.passenger_id)
        if call is None:
            call = FloorCall.for_passenger(passenger, requested_at)
            self.calls.append(call)
        return call

    def remove(self, passenger_id: int) -> Optional[FloorCall]:
        for index, call in enumerate(self.calls):
            if call.passenger_id == passenger_id:
                return self.calls.pop(index)
        return None

    def __iter__(self) -> Iterator[FloorCall]:
        return iter(self.calls)

    def __len__(self) -> int:
        return len(self.calls)
