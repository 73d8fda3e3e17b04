"""CLI for running offline LiftDispatch scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Optional

from simulation import ConfigurationError, Simulation, SimulationConfig, SimulationResult

FLAG_TYPES = {"dispatcher": str, "estimated_processing_time": float}

OVERRIDABLE = (
    "min_floor",
    "max_floor",
    "elevator_count",
    "elevator_capacity",
    "travel_time_per_floor",
    "door_hold_ticks",
    "generation_interval",
    "total_passengers",
    "estimated_processing_time",
    "random_seed",
    "max_cycles",
    "dispatcher",
)


def build_config(config: Dict, args: argparse.Namespace) -> SimulationConfig:
    values = dict(config.get("simulation", config))
    values.pop("name", None)
    values.pop("description", None)
    for key in OVERRIDABLE:
        override = getattr(args, key, None)
        if override is not None:
            values[key] = override
    return SimulationConfig.from_dict(values)


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def print_summary(name: str, result: SimulationResult) -> None:
    print(f"Scenario: {name}")
    print(f"Dispatcher: {result.config.dispatcher}")
    print(f"Total time: {result.total_time} ticks ({result.cycles} cycles)")
    print(f"Completed: {result.completed_count}/{result.config.total_passengers}")
    if result.aborted:
        print("Run aborted: cycle ceiling reached")
    print("Final metrics:")
    for key, value in asdict(result.metrics).items():
        print(f"  {key}: {value}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, nargs="?", help="Path to a JSON scenario configuration file")
    parser.add_argument("--output", type=Path, help="Optional file path to write the result as JSON")
    parser.add_argument("--trace", action="store_true", help="Print every trace line as [tick] message")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level for the console sink")
    for key in OVERRIDABLE:
        parser.add_argument(f"--{key.replace('_', '-')}", dest=key, type=FLAG_TYPES.get(key, int))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config: Dict = json.loads(args.config.read_text()) if args.config else {}
    name = config.get("name", args.config.stem if args.config else "default")
    try:
        sim_config = build_config(config, args)
        result = Simulation(sim_config).run()
    except (ConfigurationError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    if args.trace:
        for line in result.trace_lines():
            print(line)
    print_summary(name, result)

    save_results(args.output, {"scenario": name, "description": config.get("description"), **result.to_dict()})
    if args.output:
        print(f"Saved result to {args.output}")
    return 1 if result.aborted else 0


if __name__ == "__main__":
    sys.exit(main())
