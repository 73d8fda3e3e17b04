from __future__ import annotations

import json
from pathlib import Path

import run_scenario

SCENARIOS = Path(__file__).resolve().parent.parent / "scenarios"


def test_round_trip_scenario_file(tmp_path, capsys):
    output = tmp_path / "result.json"

    code = run_scenario.main([str(SCENARIOS / "round_trip.json"), "--trace", "--output", str(output)])

    assert code == 0
    printed = capsys.readouterr().out
    assert "[0] Simulation started" in printed
    assert "Scenario: round_trip" in printed
    saved = json.loads(output.read_text())
    assert saved["scenario"] == "round_trip"
    assert saved["completed"] == 1


def test_flags_override_the_file(tmp_path):
    output = tmp_path / "result.json"

    code = run_scenario.main(
        [str(SCENARIOS / "stress.json"), "--total-passengers", "6", "--dispatcher", "basic", "--output", str(output)]
    )

    assert code == 0
    saved = json.loads(output.read_text())
    assert saved["config"]["total_passengers"] == 6
    assert saved["config"]["dispatcher"] == "basic"


def test_runaway_exit_code():
    assert run_scenario.main(["--total-passengers", "5", "--max-cycles", "3", "--random-seed", "1"]) == 1


def test_invalid_configuration_exit_code(capsys):
    assert run_scenario.main(["--min-floor", "3", "--max-floor", "3"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_processing_time_flag_accepts_fractions(tmp_path):
    output = tmp_path / "result.json"

    code = run_scenario.main(
        ["--total-passengers", "6", "--random-seed", "4", "--estimated-processing-time", "2.5", "--output", str(output)]
    )

    assert code == 0
    saved = json.loads(output.read_text())
    assert saved["config"]["estimated_processing_time"] == 2.5
    assert saved["logs"][0]["details"]["max_cycles"] == 150
