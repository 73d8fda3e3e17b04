"""Cost-scoring dispatchers: relative ordering, tie-breaks and capacity handling."""

from __future__ import annotations

from typing import Tuple

import pytest

from dispatch import BasicDispatcher, CostDispatcher, ElevatorSnapshot, PendingRequest, get_dispatcher
from dispatch.utils import choose_lowest, furthest_target, is_ahead


def snapshot(
    elevator_id: int,
    position: int,
    direction: int = 0,
    targets: Tuple[int, ...] = (),
    destinations: Tuple[int, ...] = (),
    load: int = 0,
    capacity: int = 5,
) -> ElevatorSnapshot:
    return ElevatorSnapshot(
        elevator_id=elevator_id,
        position=position,
        direction=direction,
        idle=direction == 0,
        targets=targets,
        destinations=destinations,
        load=load,
        capacity=capacity,
    )


def request(origin: int, direction: int) -> PendingRequest:
    return PendingRequest(origin=origin, direction=direction, requested_at=1, passenger_id=1)


@pytest.fixture
def dispatcher() -> CostDispatcher:
    return CostDispatcher(floor_count=10)


def test_idle_and_near_beats_busy_and_far(dispatcher):
    near_idle = snapshot(1, position=3)
    far_busy = snapshot(2, position=9, direction=-1, targets=(1,), destinations=(1, 2), load=2)

    chosen = dispatcher.select_elevator([far_busy, near_idle], request(4, 1))

    assert chosen.elevator_id == 1


def test_same_direction_ahead_beats_opposite_direction(dispatcher):
    opposite = snapshot(1, position=2, direction=-1, targets=(1,))
    same_way = snapshot(2, position=2, direction=1, targets=(8,))

    chosen = dispatcher.select_elevator([opposite, same_way], request(5, 1))

    assert chosen.elevator_id == 2
    assert "reversal" in dispatcher.score(opposite, request(5, 1)).breakdown


def test_call_behind_a_sweep_is_penalised(dispatcher):
    passed_it = snapshot(1, position=6, direction=1, targets=(9,))
    idle_far = snapshot(2, position=9)

    behind = dispatcher.score(passed_it, request(3, 1))
    chosen = dispatcher.select_elevator([passed_it, idle_far], request(3, 1))

    assert behind.breakdown["behind"] == 10
    assert chosen.elevator_id == 2


def test_opposite_direction_cost_goes_through_turnaround(dispatcher):
    going_up = snapshot(1, position=4, direction=1, targets=(9,), destinations=(7,))

    score = dispatcher.score(going_up, request(2, -1))

    assert score.breakdown["to_turnaround"] == 5
    assert score.breakdown["turnaround_to_call"] == 7
    assert score.breakdown["reversal"] == 10


def test_equal_scores_go_to_first_enumerated(dispatcher):
    first = snapshot(1, position=1)
    second = snapshot(2, position=1)

    assert dispatcher.select_elevator([first, second], request(5, 1)).elevator_id == 1
    assert dispatcher.select_elevator([second, first], request(5, 1)).elevator_id == 2


def test_lighter_load_breaks_distance_tie(dispatcher):
    loaded = snapshot(1, position=5, direction=1, destinations=(9, 9), load=2)
    empty = snapshot(2, position=5, direction=1, targets=(9,))

    assert dispatcher.select_elevator([loaded, empty], request(7, 1)).elevator_id == 2


def test_fewer_commitments_break_distance_tie(dispatcher):
    busy = snapshot(1, position=5, direction=1, targets=(6, 8, 9))
    free = snapshot(2, position=5, direction=1, targets=(9,))

    assert dispatcher.select_elevator([busy, free], request(7, 1)).elevator_id == 2


def test_full_elevators_are_excluded(dispatcher):
    full_here = snapshot(1, position=5, load=5, destinations=(9,) * 5, direction=1)
    empty_far = snapshot(2, position=1)

    assert dispatcher.score(full_here, request(5, 1)) is None
    assert dispatcher.select_elevator([full_here, empty_far], request(5, 1)).elevator_id == 2


def test_no_elevator_when_every_car_is_full(dispatcher):
    cars = [snapshot(i, position=i, direction=1, load=5, destinations=(10,)) for i in (1, 2)]

    assert dispatcher.select_elevator(cars, request(5, 1)) is None


def test_full_penalty_policy_keeps_full_cars_eligible():
    dispatcher = CostDispatcher(floor_count=10, exclude_full=False, full_penalty=500)
    full = snapshot(1, position=5, direction=1, load=5, destinations=(10,))

    score = dispatcher.select_elevator([full], request(5, 1))

    assert score.elevator_id == 1
    assert score.breakdown["full"] == 500
    assert score.total > 500


def test_basic_dispatcher_prefers_idle_over_reversing():
    dispatcher = BasicDispatcher(floor_count=10)
    reversing = snapshot(1, position=5, direction=-1, targets=(1,))
    idle = snapshot(2, position=9)

    assert dispatcher.select_elevator([reversing, idle], request(5, 1)).elevator_id == 2
    assert dispatcher.score(reversing, request(5, 1)).total == 21


def test_furthest_target_in_each_direction():
    assert furthest_target(snapshot(1, position=3, direction=1, targets=(5, 8), destinations=(2,))) == 8
    assert furthest_target(snapshot(1, position=6, direction=-1, targets=(2, 9), destinations=(4,))) == 2
    assert furthest_target(snapshot(1, position=6, direction=1, targets=(2,))) == 6


def test_is_ahead_includes_current_floor():
    car = snapshot(1, position=4, direction=-1)

    assert is_ahead(car, 4)
    assert is_ahead(car, 1)
    assert not is_ahead(car, 5)


def test_choose_lowest_skips_ineligible():
    assert choose_lowest([None, None]) is None


def test_registry_lookup_is_case_insensitive():
    assert isinstance(get_dispatcher("COST", floor_count=12), CostDispatcher)
    assert isinstance(get_dispatcher("basic"), BasicDispatcher)


def test_registry_rejects_unknown_names():
    with pytest.raises(ValueError, match="Unknown dispatcher"):
        get_dispatcher("random")
