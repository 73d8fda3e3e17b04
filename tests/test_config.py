from __future__ import annotations

import pytest

from simulation import ConfigurationError, Simulation, SimulationConfig


def test_cycle_ceiling_is_derived_from_demand_and_building():
    config = SimulationConfig(total_passengers=40, min_floor=1, max_floor=10, estimated_processing_time=5)

    assert config.floor_count == 10
    assert config.cycle_ceiling == 2000


def test_explicit_max_cycles_overrides_the_derived_ceiling():
    assert SimulationConfig(max_cycles=25).cycle_ceiling == 25


def test_ceiling_never_drops_below_one():
    assert SimulationConfig(total_passengers=0).cycle_ceiling == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"min_floor": 5, "max_floor": 5},
        {"min_floor": 6, "max_floor": 2},
        {"elevator_count": 0},
        {"elevator_capacity": 0},
        {"door_hold_ticks": 0},
        {"generation_interval": 0},
        {"travel_time_per_floor": 0},
        {"total_passengers": -1},
        {"estimated_processing_time": 0},
        {"max_cycles": 0},
    ],
)
def test_invalid_configurations_are_rejected(overrides):
    with pytest.raises(ConfigurationError):
        Simulation(SimulationConfig(**overrides))


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_from_dict_round_trips():
    config = SimulationConfig(max_floor=20, elevator_count=4, random_seed=8, dispatcher="basic")

    assert SimulationConfig.from_dict(config.to_dict()) == config


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigurationError, match="floors"):
        SimulationConfig.from_dict({"floors": 12})
