from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional

from .config import SimulationConfig
from .elevator import Elevator
from .events import LogEntry
from .generator import PassengerGenerator
from .metrics import MetricsSnapshot
from .passenger import Passenger
from .state import SimulationState

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 10


@dataclass
class SimulationResult:
    """Outcome of one run, complete or aborted."""

    total_time: int
    cycles: int
    aborted: bool
    logs: List[LogEntry]
    passengers: List[Passenger]
    elevators: List[Elevator]
    metrics: MetricsSnapshot
    config: SimulationConfig

    @property
    def incomplete(self) -> List[Passenger]:
        return [p for p in self.passengers if not p.is_completed]

    @property
    def completed_count(self) -> int:
        return sum(1 for p in self.passengers if p.is_completed)

    def trace_lines(self) -> List[str]:
        return [entry.line() for entry in self.logs]

    def to_dict(self) -> dict:
        return {
            "total_time": self.total_time,
            "cycles": self.cycles,
            "aborted": self.aborted,
            "completed": self.completed_count,
            "logs": [entry.to_dict() for entry in self.logs],
            "passengers": [p.to_dict() for p in self.passengers],
            "elevators": [e.to_dict() for e in self.elevators],
            "metrics": asdict(self.metrics),
            "config": self.config.to_dict(),
        }


class Simulation:
    """Tick-stepped dispatch simulation with a runaway-cycle guard."""

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        generator: Optional[PassengerGenerator] = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.config.validate()
        self.state = SimulationState(self.config)
        self.generator = generator or PassengerGenerator(random_seed=self.config.random_seed)
        self.cycles = 0
        self.aborted = False
        self.finished = False
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}

    @property
    def current_time(self) -> int:
        return self.state.current_time

    @property
    def done(self) -> bool:
        return self.state.passengers_completed >= self.config.total_passengers

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def step(self) -> None:
        state = self.state
        state.current_time += 1
        self.cycles += 1

        self.generator.maybe_spawn(state)
        state.dispatch()
        for elevator in state.elevators:
            elevator.step(state)

        if state.current_time % PROGRESS_INTERVAL == 0:
            self._log_progress()
        self._emit("tick", state)

    def run(self) -> SimulationResult:
        if self.finished:
            return self.result()

        state = self.state
        ceiling = self.config.cycle_ceiling
        state.log.record(
            state.current_time,
            "Simulation started",
            details={
                "elevators": self.config.elevator_count,
                "total_passengers": self.config.total_passengers,
                "max_cycles": ceiling,
                "dispatcher": self.config.dispatcher,
            },
            level=logging.INFO,
        )

        while not self.done and self.cycles < ceiling:
            self.step()
            if self.cycles >= ceiling and not self.done:
                self._abort(ceiling)
                break

        state.log.record(
            state.current_time,
            f"Simulation finished at tick {state.current_time} after {self.cycles} cycles, "
            f"{state.passengers_completed}/{self.config.total_passengers} passengers completed",
            details={"cycles": self.cycles, "completed": state.passengers_completed},
            level=logging.INFO,
        )
        self._report_incomplete()

        self.finished = True
        result = self.result()
        self._emit("finished", result)
        return result

    def result(self) -> SimulationResult:
        state = self.state
        return SimulationResult(
            total_time=state.current_time,
            cycles=self.cycles,
            aborted=self.aborted,
            logs=list(state.log.entries),
            passengers=list(state.passengers),
            elevators=list(state.elevators),
            metrics=state.metrics.snapshot(state.current_time),
            config=self.config,
        )

    def _abort(self, ceiling: int) -> None:
        self.aborted = True
        state = self.state
        state.log.record(
            state.current_time,
            f"Error: simulation exceeded the cycle ceiling ({ceiling}), stopping with "
            f"{state.passengers_completed}/{self.config.total_passengers} passengers completed",
            details={
                "error": "runaway",
                "max_cycles": ceiling,
                "completed": state.passengers_completed,
                "generated": state.passengers_generated,
            },
            level=logging.ERROR,
        )

    def _report_incomplete(self) -> None:
        state = self.state
        incomplete = [p for p in state.passengers if not p.is_completed]
        if not incomplete:
            return
        level = logging.ERROR if self.aborted else logging.WARNING
        state.log.record(
            state.current_time,
            f"{len(incomplete)} passengers did not complete their trip",
            details={"incomplete": len(incomplete)},
            level=level,
        )
        for passenger in incomplete:
            state.log.record(
                state.current_time,
                f"Incomplete passenger {passenger.passenger_id}: status={passenger.status.value}, "
                f"{passenger.origin} -> {passenger.destination}, "
                f"elevator={passenger.assigned_elevator_id or 'unassigned'}",
                passenger_id=passenger.passenger_id,
                floor=passenger.origin,
                details={
                    "status": passenger.status.value,
                    "spawn_time": passenger.spawn_time,
                    "origin": passenger.origin,
                    "destination": passenger.destination,
                    "assigned_elevator_id": passenger.assigned_elevator_id or "unassigned",
                    "pickup_time": passenger.pickup_time if passenger.pickup_time is not None else "not picked up",
                    "dropoff_time": "not dropped off",
                },
                level=level,
            )

    def _log_progress(self) -> None:
        if not logger.isEnabledFor(logging.INFO):
            return
        state = self.state
        logger.info(
            "[%d] completed %d/%d, generated %d, elevators: %s",
            state.current_time,
            state.passengers_completed,
            self.config.total_passengers,
            state.passengers_generated,
            state.snapshot()["elevators"],
        )

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)


def run_simulation(config: Optional[SimulationConfig] = None) -> SimulationResult:
    return Simulation(config).run()
