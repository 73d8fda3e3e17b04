from __future__ import annotations

import random
from typing import Optional

from .calls import FloorCall
from .passenger import Passenger
from .state import SimulationState

MAX_RESAMPLE_ATTEMPTS = 1000


class PassengerGenerator:
    """Spawns one passenger every ``generation_interval`` ticks."""

    def __init__(self, random_seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.random = rng or random.Random(random_seed)

    def maybe_spawn(self, state: SimulationState) -> Optional[Passenger]:
        config = state.config
        if state.passengers_generated >= config.total_passengers:
            return None
        if state.current_time % config.generation_interval != 0:
            return None

        origin = self.random_floor(config.min_floor, config.max_floor)
        destination = self.random_floor(config.min_floor, config.max_floor, exclude=origin)
        passenger = Passenger(
            passenger_id=state.passengers_generated + 1,
            spawn_time=state.current_time,
            origin=origin,
            destination=destination,
        )
        state.passengers.append(passenger)
        state.passengers_generated += 1
        state.calls.add(FloorCall.for_passenger(passenger, state.current_time))
        state.log.record(
            state.current_time,
            f"Passenger {passenger.passenger_id} called at floor {origin} "
            f"to go to floor {destination} ({passenger.direction.value})",
            passenger_id=passenger.passenger_id,
            floor=origin,
            details={"destination": destination, "direction": passenger.direction.value},
        )
        return passenger

    def random_floor(self, min_floor: int, max_floor: int, exclude: Optional[int] = None) -> int:
        """Uniform floor in ``[min_floor, max_floor]``, resampled while it equals ``exclude``."""
        if exclude is not None and min_floor == max_floor == exclude:
            raise ValueError("Cannot pick a floor other than the only floor in the building")
        for _ in range(MAX_RESAMPLE_ATTEMPTS):
            floor = self.random.randint(min_floor, max_floor)
            if floor != exclude:
                return floor
        # Resampling kept hitting the excluded floor; take a neighbour instead.
        return exclude + 1 if exclude < max_floor else exclude - 1
