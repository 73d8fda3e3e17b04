from __future__ import annotations

import random

from simulation import Direction, PassengerGenerator, SimulationConfig, SimulationState


def test_spawns_only_on_the_generation_cadence():
    state = SimulationState(SimulationConfig(generation_interval=3, total_passengers=5))
    generator = PassengerGenerator(random_seed=4)

    spawned = []
    for tick in range(1, 7):
        state.current_time = tick
        spawned.append(generator.maybe_spawn(state) is not None)

    assert spawned == [False, False, True, False, False, True]
    assert state.passengers_generated == 2


def test_stops_at_the_configured_total():
    state = SimulationState(SimulationConfig(total_passengers=2))
    generator = PassengerGenerator(random_seed=4)

    for tick in range(1, 6):
        state.current_time = tick
        generator.maybe_spawn(state)

    assert [p.passenger_id for p in state.passengers] == [1, 2]
    assert state.passengers_generated == 2


def test_spawn_registers_a_matching_call_and_log_entry():
    state = SimulationState(SimulationConfig())
    state.current_time = 1

    passenger = PassengerGenerator(random_seed=11).maybe_spawn(state)

    call = state.calls.find(passenger.passenger_id)
    assert call.floor == passenger.origin
    assert call.requested_at == 1
    assert call.direction is passenger.direction
    entry = state.log.last
    assert entry.passenger_id == passenger.passenger_id
    assert entry.details["destination"] == passenger.destination


def test_floors_stay_in_range_and_differ():
    state = SimulationState(SimulationConfig(min_floor=-2, max_floor=3, total_passengers=300))
    generator = PassengerGenerator(random_seed=3)

    for tick in range(1, 301):
        state.current_time = tick
        generator.maybe_spawn(state)

    for passenger in state.passengers:
        assert -2 <= passenger.origin <= 3
        assert -2 <= passenger.destination <= 3
        assert passenger.origin != passenger.destination
        expected = Direction.UP if passenger.destination > passenger.origin else Direction.DOWN
        assert passenger.direction is expected


def test_two_floor_building_always_picks_the_other_floor():
    generator = PassengerGenerator(rng=random.Random(0))

    assert {generator.random_floor(1, 2, exclude=1) for _ in range(50)} == {2}


def test_same_seed_same_passengers():
    def spawn_all(seed):
        state = SimulationState(SimulationConfig(total_passengers=10))
        generator = PassengerGenerator(random_seed=seed)
        for tick in range(1, 11):
            state.current_time = tick
            generator.maybe_spawn(state)
        return [(p.origin, p.destination) for p in state.passengers]

    assert spawn_all(99) == spawn_all(99)
