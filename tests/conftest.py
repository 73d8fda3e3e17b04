"""
Shared pytest fixtures for LiftDispatch tests.
"""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from simulation import FloorCall, Passenger, SimulationConfig, SimulationState


@pytest.fixture
def config() -> SimulationConfig:
    """The reference building: floors 1-10, two cars of five, one-tick doors."""
    return SimulationConfig(random_seed=1)


@pytest.fixture
def state(config: SimulationConfig) -> SimulationState:
    return SimulationState(config)


@pytest.fixture
def add_waiting(state: SimulationState) -> Callable[..., Passenger]:
    """
    Returns a factory that registers a waiting passenger and its call.

    Example usage:
        def test_boarding(state, add_waiting):
            rider = add_waiting(origin=3, destination=7, elevator_id=1)
    """

    def _add(origin: int, destination: int, elevator_id: Optional[int] = None, spawn_time: int = 0) -> Passenger:
        passenger = Passenger(
            passenger_id=len(state.passengers) + 1,
            spawn_time=spawn_time,
            origin=origin,
            destination=destination,
            assigned_elevator_id=elevator_id,
        )
        state.passengers.append(passenger)
        state.passengers_generated += 1
        state.calls.add(FloorCall.for_passenger(passenger, spawn_time))
        return passenger

    return _add
